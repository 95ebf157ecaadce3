"""Configurable fake company validator for development and testing.

Knows a fixed set of company ids and can be switched into a failure mode
that reports COMMUNICATION_ERROR for every lookup, simulating a company
service that is down or timing out.
"""

from reviews.company.port import CompanyLookup, CompanyValidator


class FakeCompanyValidator(CompanyValidator):
    """In-memory company registry."""

    def __init__(self, known_company_ids=None) -> None:
        self.known_company_ids: set[str] = {str(c) for c in (known_company_ids or [])}
        self.failure: Exception | None = None
        self.calls: list[dict] = []

    def add_company(self, company_id) -> None:
        self.known_company_ids.add(str(company_id))

    def configure(self, failure: Exception | None = None) -> None:
        """Fail every lookup with ``failure`` (or recover when None)."""
        self.failure = failure

    def exists(self, company_id: str, auth_token: str | None = None) -> CompanyLookup:
        self.calls.append({"method": "exists", "company_id": str(company_id), "auth_token": auth_token})

        if self.failure is not None:
            return CompanyLookup.communication_error(company_id, self.failure)
        if str(company_id) in self.known_company_ids:
            return CompanyLookup.found(company_id)
        return CompanyLookup.not_found(company_id)

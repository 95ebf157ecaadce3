"""HTTP company validator backed by the company service's REST API.

Issues ``GET /companies/{company_id}`` with an httpx client bounded by a
timeout and classifies the outcome:

- 2xx with a JSON body  -> FOUND
- 404                   -> NOT_FOUND
- any other status      -> COMMUNICATION_ERROR (HTTPStatusError)
- timeout / transport   -> COMMUNICATION_ERROR
- 2xx with a non-JSON body -> COMMUNICATION_ERROR (malformed response)
"""

import httpx
import structlog

from reviews.company.port import CompanyLookup, CompanyValidator
from reviews.config import Settings, load_settings

logger = structlog.get_logger(__name__)


class MalformedCompanyResponse(ValueError):
    """The company service answered 2xx with a body that is not JSON."""


class HttpCompanyValidator(CompanyValidator):
    """Company validator calling the company service over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 2.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "HttpCompanyValidator":
        settings = settings or load_settings()
        return cls(base_url=settings.company_service_url, timeout=settings.company_service_timeout)

    def close(self) -> None:
        self.client.close()

    def exists(self, company_id: str, auth_token: str | None = None) -> CompanyLookup:
        headers = {"Accept": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"

        try:
            response = self.client.get(f"/companies/{company_id}", headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("Company service timed out", company_id=str(company_id), timeout=self.timeout)
            return CompanyLookup.communication_error(company_id, exc)
        except httpx.HTTPError as exc:
            logger.warning("Company service unreachable", company_id=str(company_id), error=str(exc))
            return CompanyLookup.communication_error(company_id, exc)

        if response.status_code == 404:
            return CompanyLookup.not_found(company_id)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Company service returned an error",
                company_id=str(company_id),
                status_code=response.status_code,
            )
            return CompanyLookup.communication_error(company_id, exc)

        try:
            response.json()
        except ValueError as exc:
            logger.warning("Company service returned a malformed body", company_id=str(company_id))
            return CompanyLookup.communication_error(
                company_id, MalformedCompanyResponse(f"Malformed company response: {exc}")
            )

        return CompanyLookup.found(company_id)

"""Company validator port (abstract interface).

Answers "does this company exist?" against the external company registry.
The answer is a tagged result, never an exception, so callers branch on
``status`` instead of matching exception types. Anything other than a
definitive "absent" that is not a clean success is COMMUNICATION_ERROR;
an ambiguous failure is never reported as FOUND.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class CompanyStatus(Enum):
    FOUND = "Found"
    NOT_FOUND = "NotFound"
    COMMUNICATION_ERROR = "CommunicationError"


@dataclass(frozen=True)
class CompanyLookup:
    """Result of a company existence check."""

    company_id: str
    status: CompanyStatus
    cause: Exception | None = None

    @classmethod
    def found(cls, company_id) -> "CompanyLookup":
        return cls(company_id=str(company_id), status=CompanyStatus.FOUND)

    @classmethod
    def not_found(cls, company_id) -> "CompanyLookup":
        return cls(company_id=str(company_id), status=CompanyStatus.NOT_FOUND)

    @classmethod
    def communication_error(cls, company_id, cause: Exception) -> "CompanyLookup":
        return cls(company_id=str(company_id), status=CompanyStatus.COMMUNICATION_ERROR, cause=cause)


class CompanyValidator(ABC):
    """Abstract company validator interface."""

    @abstractmethod
    def exists(self, company_id: str, auth_token: str | None = None) -> CompanyLookup:
        """Look the company up. ``auth_token`` is forwarded to the registry when given."""
        ...

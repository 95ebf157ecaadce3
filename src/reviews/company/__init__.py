"""Company validator factory.

Provides get_validator() / set_validator() to swap implementations:
- HttpCompanyValidator against the company service (default)
- FakeCompanyValidator for development and testing
"""

from reviews.company.http_adapter import HttpCompanyValidator
from reviews.company.port import CompanyValidator

_current_validator: CompanyValidator | None = None


def get_validator() -> CompanyValidator:
    """Return the current company validator, built from settings on first use."""
    global _current_validator
    if _current_validator is None:
        _current_validator = HttpCompanyValidator.from_settings()
    return _current_validator


def set_validator(validator: CompanyValidator) -> None:
    """Override the active company validator (useful for tests)."""
    global _current_validator
    _current_validator = validator


def reset_validator() -> None:
    """Reset to the default validator."""
    global _current_validator
    _current_validator = None

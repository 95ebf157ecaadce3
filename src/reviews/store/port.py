"""Review store port (abstract interface).

Pure persistence and query primitives, no business rules. Adapters:
ProteanReviewStore (the domain's configured database) and
InMemoryReviewStore (tests and local development).
"""

from abc import ABC, abstractmethod

from reviews.review.contracts import ReviewPage
from reviews.review.review import Review

# Fields a listing may be sorted by, keyed by every accepted spelling.
SORTABLE_FIELDS = {
    "id": "id",
    "title": "title",
    "description": "description",
    "rating": "rating",
    "company_id": "company_id",
    "companyId": "company_id",
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
}


def sorted_descending(items, field_name):
    """Sort reviews by ``field_name``, highest first, missing values last."""
    present = [r for r in items if getattr(r, field_name) is not None]
    missing = [r for r in items if getattr(r, field_name) is None]
    present.sort(key=lambda r: getattr(r, field_name), reverse=True)
    return present + missing


class ReviewStore(ABC):
    """Abstract review store interface."""

    @abstractmethod
    def save(self, review: Review) -> Review:
        """Insert or replace a review and return the stored instance."""
        ...

    @abstractmethod
    def find_by_id(self, review_id: str) -> Review | None: ...

    @abstractmethod
    def find_all(self) -> list[Review]:
        """Every review, in insertion order."""
        ...

    @abstractmethod
    def find_by_company(self, company_id: str) -> list[Review]:
        """The company's reviews, in insertion order."""
        ...

    @abstractmethod
    def find_by_company_paged(self, company_id: str, page: int, page_size: int) -> ReviewPage:
        """One zero-based page of the company's reviews, in insertion order."""
        ...

    @abstractmethod
    def find_by_company_sorted(self, company_id: str, field_name: str) -> list[Review]:
        """The company's reviews sorted descending on a canonical field name."""
        ...

    @abstractmethod
    def find_by_company_and_rating_greater_than(self, company_id: str, rating: float) -> list[Review]:
        """The company's reviews with a rating strictly above ``rating``."""
        ...

    @abstractmethod
    def delete(self, review: Review) -> None: ...

    @abstractmethod
    def average_rating_by_company(self, company_id: str) -> float | None:
        """Mean rating of the company's reviews, or None when it has none."""
        ...

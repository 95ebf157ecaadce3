"""In-memory review store for development and testing.

Keeps reviews in insertion order and records every call in ``calls`` so
tests can assert which primitives the orchestrator used (e.g. that no
``save`` happened after a failed validation).
"""

from reviews.review.contracts import ReviewPage
from reviews.review.errors import PersistenceError
from reviews.review.review import Review
from reviews.store.port import ReviewStore, sorted_descending


class InMemoryReviewStore(ReviewStore):
    """Dictionary-backed review store."""

    def __init__(self) -> None:
        self._reviews: dict[str, Review] = {}
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None

    def configure(self, fail_with: Exception | None = None) -> None:
        """Make every subsequent call raise PersistenceError wrapping ``fail_with``."""
        self.fail_with = fail_with

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append({"method": method, **kwargs})
        if self.fail_with is not None:
            raise PersistenceError(f"Review store unavailable: {self.fail_with}") from self.fail_with

    def calls_to(self, method: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method]

    def save(self, review: Review) -> Review:
        self._record("save", review_id=str(review.id))
        self._reviews[str(review.id)] = review
        return review

    def find_by_id(self, review_id: str) -> Review | None:
        self._record("find_by_id", review_id=str(review_id))
        return self._reviews.get(str(review_id))

    def find_all(self) -> list[Review]:
        self._record("find_all")
        return list(self._reviews.values())

    def _company_reviews(self, company_id: str) -> list[Review]:
        return [r for r in self._reviews.values() if str(r.company_id) == str(company_id)]

    def find_by_company(self, company_id: str) -> list[Review]:
        self._record("find_by_company", company_id=str(company_id))
        return self._company_reviews(company_id)

    def find_by_company_paged(self, company_id: str, page: int, page_size: int) -> ReviewPage:
        self._record("find_by_company_paged", company_id=str(company_id), page=page, page_size=page_size)
        matching = self._company_reviews(company_id)
        start = page * page_size
        return ReviewPage(
            items=matching[start : start + page_size],
            page=page,
            page_size=page_size,
            total=len(matching),
        )

    def find_by_company_sorted(self, company_id: str, field_name: str) -> list[Review]:
        self._record("find_by_company_sorted", company_id=str(company_id), field_name=field_name)
        return sorted_descending(self._company_reviews(company_id), field_name)

    def find_by_company_and_rating_greater_than(self, company_id: str, rating: float) -> list[Review]:
        self._record("find_by_company_and_rating_greater_than", company_id=str(company_id), rating=rating)
        return [r for r in self._company_reviews(company_id) if r.rating > rating]

    def delete(self, review: Review) -> None:
        self._record("delete", review_id=str(review.id))
        self._reviews.pop(str(review.id), None)

    def average_rating_by_company(self, company_id: str) -> float | None:
        self._record("average_rating_by_company", company_id=str(company_id))
        ratings = [r.rating for r in self._company_reviews(company_id)]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)

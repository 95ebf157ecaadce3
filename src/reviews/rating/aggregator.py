"""RatingAggregator — mean rating of a company's current reviews."""

from reviews.store.port import ReviewStore


class RatingAggregator:
    def __init__(self, store: ReviewStore) -> None:
        self.store = store

    def average_for(self, company_id: str) -> float | None:
        """Exact mean over every review the company has now, or None if it has none."""
        return self.store.average_rating_by_company(company_id)

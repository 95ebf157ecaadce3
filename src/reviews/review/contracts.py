"""Input and output projections of a Review.

The response deliberately leaves out ``company_id``: callers already know
which company they asked about, and the original contract never exposed it.
"""

import math
from dataclasses import dataclass, field

from reviews.review.review import Review


@dataclass(frozen=True)
class ReviewRequest:
    """Fields supplied on create and update. The review id travels separately."""

    company_id: str
    rating: float
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ReviewResponse:
    id: str
    title: str | None
    description: str | None
    rating: float

    @classmethod
    def from_review(cls, review: Review) -> "ReviewResponse":
        return cls(
            id=str(review.id),
            title=review.title,
            description=review.description,
            rating=review.rating,
        )


@dataclass(frozen=True)
class ReviewPage:
    """One zero-based page of reviews plus the size of the full result."""

    items: list = field(default_factory=list)
    page: int = 0
    page_size: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def map(self, fn) -> "ReviewPage":
        """Return a page with ``fn`` applied to every item."""
        return ReviewPage(
            items=[fn(item) for item in self.items],
            page=self.page,
            page_size=self.page_size,
            total=self.total,
        )

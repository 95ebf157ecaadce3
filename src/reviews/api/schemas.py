"""Pydantic request/response schemas for the Reviews API.

These are separate from the orchestrator's contracts (anti-corruption
pattern). The API layer is the external contract; ReviewRequest and
ReviewResponse are internal.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from reviews.review.contracts import ReviewPage, ReviewRequest, ReviewResponse


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ReviewBody(BaseModel):
    """Body of create and update requests. Numeric company ids are accepted."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    company_id: str = Field(min_length=1)
    rating: float = Field(allow_inf_nan=False)
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None

    def to_request(self) -> ReviewRequest:
        return ReviewRequest(
            company_id=self.company_id,
            rating=self.rating,
            title=self.title,
            description=self.description,
        )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewOut(BaseModel):
    id: str
    title: str | None = None
    description: str | None = None
    rating: float

    @classmethod
    def from_response(cls, response: ReviewResponse) -> ReviewOut:
        return cls(
            id=response.id,
            title=response.title,
            description=response.description,
            rating=response.rating,
        )


class ReviewPageOut(BaseModel):
    items: list[ReviewOut]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page: ReviewPage) -> ReviewPageOut:
        return cls(
            items=[ReviewOut.from_response(r) for r in page.items],
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous,
        )


class AverageRatingOut(BaseModel):
    company_id: str
    average_rating: float


class StatusResponse(BaseModel):
    status: str = "ok"
    message: str | None = None

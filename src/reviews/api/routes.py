"""FastAPI routes for the Reviews bounded context.

Each route translates between Pydantic schemas (external contract) and
ReviewOrchestrator calls. Every route except the average-rating statistic
requires a bearer token; the token is verified upstream by the gateway and
only forwarded from here (to the company service, on creation).

Fixed paths (``/paginated``, ``/sorted``, ...) are declared before
``/{review_id}`` so they are not captured as review ids.

Routes are plain functions: the orchestrator blocks on the company service
and on Redis, so FastAPI runs each call in its worker threadpool and the
event loop stays free. The domain context pushed by the app middleware is
carried into the worker thread with the request's context variables.
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from reviews.api.schemas import (
    AverageRatingOut,
    ReviewBody,
    ReviewOut,
    ReviewPageOut,
    StatusResponse,
)
from reviews.company import get_validator
from reviews.publisher import get_publisher
from reviews.rating.aggregator import RatingAggregator
from reviews.review.orchestrator import ReviewOrchestrator
from reviews.store import get_store

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------
def get_orchestrator() -> ReviewOrchestrator:
    """Compose the orchestrator from the currently configured adapters."""
    store = get_store()
    return ReviewOrchestrator(
        store=store,
        validator=get_validator(),
        publisher=get_publisher(),
        aggregator=RatingAggregator(store),
    )


def require_caller(authorization: str | None = Header(default=None)) -> str:
    """Return the caller's bearer token, or reject the request with 401."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token.strip()


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewOut)
def create_review(
    body: ReviewBody,
    token: str = Depends(require_caller),
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> ReviewOut:
    """Create a review for an existing company."""
    created = orchestrator.create(body.to_request(), auth_token=token)
    return ReviewOut.from_response(created)


@review_router.get("", response_model=list[ReviewOut], dependencies=[Depends(require_caller)])
def list_reviews(
    company_id: str | None = None,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> list[ReviewOut]:
    """List every review, or only one company's."""
    return [ReviewOut.from_response(r) for r in orchestrator.list(company_id)]


@review_router.get("/paginated", response_model=ReviewPageOut, dependencies=[Depends(require_caller)])
def list_reviews_paged(
    company_id: str,
    page: int = Query(default=0, ge=0),
    page_size: int = Query(default=10, ge=1, le=100),
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> ReviewPageOut:
    """One zero-based page of a company's reviews."""
    return ReviewPageOut.from_page(orchestrator.list_paginated(company_id, page, page_size))


@review_router.get("/sorted", response_model=list[ReviewOut], dependencies=[Depends(require_caller)])
def list_reviews_sorted(
    company_id: str,
    field: str,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> list[ReviewOut]:
    """A company's reviews, descending on ``field``."""
    return [ReviewOut.from_response(r) for r in orchestrator.list_sorted(company_id, field)]


@review_router.get("/rating-above", response_model=list[ReviewOut], dependencies=[Depends(require_caller)])
def list_reviews_above_rating(
    company_id: str,
    min_rating: float,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> list[ReviewOut]:
    """A company's reviews rated strictly above ``min_rating``."""
    return [ReviewOut.from_response(r) for r in orchestrator.list_by_min_rating(company_id, min_rating)]


@review_router.get("/stats/average-rating", response_model=AverageRatingOut)
def average_rating(
    company_id: str,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> AverageRatingOut:
    """Average rating of a company. Public: no bearer token required."""
    return AverageRatingOut(company_id=company_id, average_rating=orchestrator.average_rating(company_id))


# ---------------------------------------------------------------------------
# Single review
# ---------------------------------------------------------------------------
@review_router.get("/{review_id}", response_model=ReviewOut, dependencies=[Depends(require_caller)])
def get_review(
    review_id: str,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> ReviewOut:
    found = orchestrator.get_by_id(review_id)
    if found is None:
        raise HTTPException(status_code=404, detail=f"Review not found: {review_id}")
    return ReviewOut.from_response(found)


@review_router.put("/{review_id}", response_model=StatusResponse, dependencies=[Depends(require_caller)])
def update_review(
    review_id: str,
    body: ReviewBody,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> StatusResponse:
    """Overwrite a review's title, description, rating and company."""
    if not orchestrator.update(review_id, body.to_request()):
        raise HTTPException(status_code=404, detail=f"Review not found: {review_id}")
    return StatusResponse(message="Review updated successfully")


@review_router.delete("/{review_id}", response_model=StatusResponse, dependencies=[Depends(require_caller)])
def delete_review(
    review_id: str,
    orchestrator: ReviewOrchestrator = Depends(get_orchestrator),
) -> StatusResponse:
    if not orchestrator.delete(review_id):
        raise HTTPException(status_code=404, detail=f"Review not found: {review_id}")
    return StatusResponse(message="Review deleted successfully")

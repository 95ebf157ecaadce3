"""ReviewOrchestrator — sequences every review operation.

Built from an explicit set of collaborators (store, company validator,
event publisher, rating aggregator) and holds no state between calls.

Creation runs three steps with no atomic span across them:

    validate company  ->  persist review  ->  publish ReviewCreated

A validation failure stops before anything is written. Once the store has
accepted the review the write is committed: a failed publish is logged and
the review stays. Consumers of the event stream must cope with missing or
duplicate events.

Updates overwrite all four mutable fields, including ``company_id``, without
asking the company registry again.
"""

from __future__ import annotations

import structlog

from reviews.company.port import CompanyStatus, CompanyValidator
from reviews.publisher.port import EventPublisher, ReviewEvent
from reviews.rating.aggregator import RatingAggregator
from reviews.review.contracts import ReviewPage, ReviewRequest, ReviewResponse
from reviews.review.errors import (
    CompanyNotFound,
    DownstreamCommunicationError,
    InvalidPageRequest,
    InvalidSortField,
)
from reviews.review.review import Review
from reviews.store.port import SORTABLE_FIELDS, ReviewStore

logger = structlog.get_logger(__name__)


class ReviewOrchestrator:
    def __init__(
        self,
        store: ReviewStore,
        validator: CompanyValidator,
        publisher: EventPublisher,
        aggregator: RatingAggregator | None = None,
    ) -> None:
        self.store = store
        self.validator = validator
        self.publisher = publisher
        self.aggregator = aggregator or RatingAggregator(store)

    # -------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------
    def create(self, request: ReviewRequest, auth_token: str | None = None) -> ReviewResponse:
        """Validate the company, persist the review, then announce it.

        Raises CompanyNotFound when the registry says the company is absent,
        and DownstreamCommunicationError when the registry could not answer.
        """
        company_id = str(request.company_id)
        logger.info("Attempting to create review", company_id=company_id)

        self._ensure_company_exists(company_id, auth_token)

        review = Review.create(
            company_id=company_id,
            rating=request.rating,
            title=request.title,
            description=request.description,
        )
        review = self.store.save(review)

        self._announce(review)

        logger.info("Review created", review_id=str(review.id), company_id=company_id)
        return ReviewResponse.from_review(review)

    def _ensure_company_exists(self, company_id: str, auth_token: str | None) -> None:
        lookup = self.validator.exists(company_id, auth_token=auth_token)

        if lookup.status is CompanyStatus.FOUND:
            return
        if lookup.status is CompanyStatus.NOT_FOUND:
            logger.warning("Company validation failed, company not found", company_id=company_id)
            raise CompanyNotFound(company_id)
        if lookup.status is CompanyStatus.COMMUNICATION_ERROR:
            logger.error(
                "Error validating company",
                company_id=company_id,
                error=str(lookup.cause),
            )
            raise DownstreamCommunicationError(
                "Error communicating with company service", cause=lookup.cause
            ) from lookup.cause
        raise DownstreamCommunicationError(f"Unexpected company lookup status: {lookup.status!r}")

    def _announce(self, review: Review) -> None:
        event = ReviewEvent.from_review(review)
        try:
            result = self.publisher.publish(event)
        except Exception as exc:
            logger.exception("Review event publisher raised", review_id=event.id, error=str(exc))
            return

        if not result.success:
            logger.warning(
                "Review persisted but its event was not published",
                review_id=event.id,
                company_id=event.company_id,
                reason=result.failure_reason,
            )

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_by_id(self, review_id: str) -> ReviewResponse | None:
        logger.info("Finding review", review_id=str(review_id))
        review = self.store.find_by_id(review_id)
        return ReviewResponse.from_review(review) if review is not None else None

    def list(self, company_id: str | None = None) -> list[ReviewResponse]:
        if company_id is not None:
            found = self.store.find_by_company(str(company_id))
        else:
            found = self.store.find_all()
        logger.info("Listed reviews", company_id=company_id, count=len(found))
        return [ReviewResponse.from_review(r) for r in found]

    def list_paginated(self, company_id: str, page: int, page_size: int) -> ReviewPage:
        if page < 0 or page_size < 1:
            raise InvalidPageRequest(page, page_size)

        logger.info("Listing reviews page", company_id=str(company_id), page=page, page_size=page_size)
        result = self.store.find_by_company_paged(str(company_id), page, page_size)
        return result.map(ReviewResponse.from_review)

    def list_sorted(self, company_id: str, field: str) -> list[ReviewResponse]:
        """Company reviews in descending order of ``field``. There is no ascending mode."""
        canonical = SORTABLE_FIELDS.get(field)
        if canonical is None:
            raise InvalidSortField(field, sorted(set(SORTABLE_FIELDS.values())))

        logger.info("Listing sorted reviews", company_id=str(company_id), field=canonical)
        found = self.store.find_by_company_sorted(str(company_id), canonical)
        return [ReviewResponse.from_review(r) for r in found]

    def list_by_min_rating(self, company_id: str, min_rating: float) -> list[ReviewResponse]:
        """Company reviews rated strictly above ``min_rating``."""
        logger.info("Listing reviews above rating", company_id=str(company_id), min_rating=min_rating)
        found = self.store.find_by_company_and_rating_greater_than(str(company_id), min_rating)
        return [ReviewResponse.from_review(r) for r in found]

    # -------------------------------------------------------------------
    # Update / delete
    # -------------------------------------------------------------------
    def update(self, review_id: str, request: ReviewRequest) -> bool:
        """Overwrite the review's fields. Returns False, writing nothing, when it does not exist."""
        logger.info("Attempting to update review", review_id=str(review_id))
        review = self.store.find_by_id(review_id)
        if review is None:
            logger.warning("Review not found", review_id=str(review_id))
            return False

        new_company_id = str(request.company_id)
        if str(review.company_id) != new_company_id:
            logger.warning(
                "Review company changed without re-validation",
                review_id=str(review_id),
                from_company_id=str(review.company_id),
                to_company_id=new_company_id,
            )

        review.overwrite(
            title=request.title,
            description=request.description,
            rating=request.rating,
            company_id=new_company_id,
        )
        self.store.save(review)
        logger.info("Review updated", review_id=str(review_id))
        return True

    def delete(self, review_id: str) -> bool:
        """Hard-delete the review. Returns False when it does not exist."""
        logger.info("Attempting to delete review", review_id=str(review_id))
        review = self.store.find_by_id(review_id)
        if review is None:
            logger.warning("Review not found", review_id=str(review_id))
            return False

        self.store.delete(review)
        logger.info("Review deleted", review_id=str(review_id))
        return True

    # -------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------
    def average_rating(self, company_id: str) -> float:
        """Mean rating of the company's reviews; 0.0 when it has none."""
        average = self.aggregator.average_for(str(company_id))
        if average is None:
            logger.info("No ratings found for company", company_id=str(company_id))
            return 0.0
        return average

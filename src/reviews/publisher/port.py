"""Event publisher port (abstract interface).

Best-effort emission of review events to an external bus. Adapters report
failure through ``PublishResult`` instead of raising, and must bound their
own calls with a timeout. There is no delivery guarantee: consumers must
tolerate both duplicates and gaps.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ReviewEvent:
    """Snapshot of a just-created review."""

    id: str
    company_id: str
    rating: float
    description: str | None = None

    event_type = "ReviewCreated"

    @classmethod
    def from_review(cls, review) -> "ReviewEvent":
        return cls(
            id=str(review.id),
            company_id=str(review.company_id),
            rating=review.rating,
            description=review.description,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PublishResult:
    """Result of a publish attempt."""

    success: bool
    message_id: str | None = None
    failure_reason: str | None = None


class EventPublisher(ABC):
    """Abstract event publisher interface."""

    @abstractmethod
    def publish(self, event: ReviewEvent) -> PublishResult:
        """Hand the event to the bus. Never blocks beyond the adapter's timeout."""
        ...

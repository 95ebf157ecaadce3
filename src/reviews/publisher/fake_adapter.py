"""Configurable fake event publisher for development and testing.

Records every published event in ``events`` and can be configured to fail,
either by returning an unsuccessful result or by raising, to exercise the
"write committed, event lost" path.
"""

from uuid import uuid4

from reviews.publisher.port import EventPublisher, PublishResult, ReviewEvent


class FakeEventPublisher(EventPublisher):
    """In-memory event bus."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Broker unavailable"
        self.raise_error: Exception | None = None
        self.events: list[ReviewEvent] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Broker unavailable",
        raise_error: Exception | None = None,
    ) -> None:
        """Configure publisher behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def publish(self, event: ReviewEvent) -> PublishResult:
        if self.raise_error is not None:
            raise self.raise_error

        if self.should_succeed:
            self.events.append(event)
            return PublishResult(success=True, message_id=f"fake_msg_{uuid4().hex[:12]}")
        return PublishResult(success=False, failure_reason=self.failure_reason)

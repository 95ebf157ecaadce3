"""Event publisher factory.

Provides get_publisher() / set_publisher() to swap implementations:
- RedisStreamPublisher for the review event stream (default)
- FakeEventPublisher for development and testing
"""

from reviews.publisher.port import EventPublisher
from reviews.publisher.redis_adapter import RedisStreamPublisher

_current_publisher: EventPublisher | None = None


def get_publisher() -> EventPublisher:
    """Return the current event publisher, built from settings on first use."""
    global _current_publisher
    if _current_publisher is None:
        _current_publisher = RedisStreamPublisher.from_settings()
    return _current_publisher


def set_publisher(publisher: EventPublisher) -> None:
    """Override the active event publisher (useful for tests)."""
    global _current_publisher
    _current_publisher = publisher


def reset_publisher() -> None:
    """Reset to the default publisher."""
    global _current_publisher
    _current_publisher = None

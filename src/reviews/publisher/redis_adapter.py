"""Redis Streams event publisher.

Appends each event to a stream with ``XADD`` as two fields: ``type`` (the
event name) and ``payload`` (the JSON-encoded snapshot). The stream is trimmed
to roughly ``maxlen`` entries on each append. Connect and socket
timeouts bound every call, so a stalled Redis fails the publish instead of
hanging review creation.
"""

import json

import redis
import structlog

from reviews.config import Settings, load_settings
from reviews.publisher.port import EventPublisher, PublishResult, ReviewEvent

logger = structlog.get_logger(__name__)


class RedisStreamPublisher(EventPublisher):
    """Publishes review events to a Redis stream."""

    def __init__(self, client: redis.Redis, stream: str, maxlen: int | None = None) -> None:
        self.client = client
        self.stream = stream
        self.maxlen = maxlen

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RedisStreamPublisher":
        settings = settings or load_settings()
        client = redis.Redis.from_url(
            settings.redis_url,
            socket_timeout=settings.event_publish_timeout,
            socket_connect_timeout=settings.event_publish_timeout,
        )
        return cls(client=client, stream=settings.review_events_stream, maxlen=settings.review_events_maxlen)

    def publish(self, event: ReviewEvent) -> PublishResult:
        fields = {
            "type": event.event_type,
            "payload": json.dumps(event.to_dict()),
        }
        try:
            message_id = self.client.xadd(self.stream, fields, maxlen=self.maxlen, approximate=True)
        except redis.RedisError as exc:
            logger.warning(
                "Failed to publish review event",
                stream=self.stream,
                review_id=event.id,
                error=str(exc),
            )
            return PublishResult(success=False, failure_reason=str(exc))

        if isinstance(message_id, bytes):
            message_id = message_id.decode()
        return PublishResult(success=True, message_id=message_id)

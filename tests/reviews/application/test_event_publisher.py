"""Tests for event publisher port/adapter integration."""

import json

import pytest
import redis
from reviews.config import Settings, load_settings
from reviews.publisher import get_publisher, reset_publisher, set_publisher
from reviews.publisher.fake_adapter import FakeEventPublisher
from reviews.publisher.port import PublishResult, ReviewEvent
from reviews.publisher.redis_adapter import RedisStreamPublisher


class RecordingRedis:
    """Stands in for redis.Redis, capturing XADD calls."""

    def __init__(self, error=None):
        self.error = error
        self.entries = []

    def xadd(self, name, fields, maxlen=None, approximate=True):
        if self.error is not None:
            raise self.error
        self.entries.append({"stream": name, "fields": fields, "maxlen": maxlen})
        return f"1700000000000-{len(self.entries)}".encode()


def _event():
    return ReviewEvent(id="rev-1", company_id="1", rating=5.0, description="Loved it")


class TestRedisStreamPublisher:
    def test_appends_event_to_stream(self):
        client = RecordingRedis()
        publisher = RedisStreamPublisher(client=client, stream="reviews::review-created")

        result = publisher.publish(_event())

        assert result == PublishResult(success=True, message_id="1700000000000-1")
        entry = client.entries[0]
        assert entry["stream"] == "reviews::review-created"
        assert entry["fields"]["type"] == "ReviewCreated"
        assert json.loads(entry["fields"]["payload"]) == {
            "id": "rev-1",
            "company_id": "1",
            "rating": 5.0,
            "description": "Loved it",
        }

    def test_passes_stream_cap(self):
        client = RecordingRedis()
        RedisStreamPublisher(client=client, stream="s", maxlen=1000).publish(_event())
        assert client.entries[0]["maxlen"] == 1000

    def test_redis_timeout_reported_as_failure(self):
        client = RecordingRedis(error=redis.TimeoutError("Timeout reading from socket"))

        result = RedisStreamPublisher(client=client, stream="s").publish(_event())

        assert result.success is False
        assert "Timeout" in result.failure_reason

    def test_connection_error_reported_as_failure(self):
        client = RecordingRedis(error=redis.ConnectionError("refused"))
        result = RedisStreamPublisher(client=client, stream="s").publish(_event())
        assert result.success is False

    def test_from_settings_uses_stream_name_and_cap(self):
        publisher = RedisStreamPublisher.from_settings(
            Settings(
                redis_url="redis://localhost:6390/2",
                review_events_stream="custom-stream",
                review_events_maxlen=5000,
            )
        )
        assert publisher.stream == "custom-stream"
        assert publisher.maxlen == 5000
        assert isinstance(publisher.client, redis.Redis)

    def test_default_settings_cap_the_stream(self, monkeypatch):
        monkeypatch.delenv("REVIEW_EVENTS_MAXLEN", raising=False)
        publisher = RedisStreamPublisher.from_settings(load_settings())
        assert publisher.maxlen == Settings().review_events_maxlen
        assert publisher.maxlen > 0

    def test_stream_cap_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("REVIEW_EVENTS_MAXLEN", "250")
        assert load_settings().review_events_maxlen == 250


class TestFakeEventPublisher:
    def test_default_publish_succeeds(self):
        publisher = FakeEventPublisher()
        result = publisher.publish(_event())

        assert result.success is True
        assert result.message_id is not None
        assert publisher.events == [_event()]

    def test_configured_failure(self):
        publisher = FakeEventPublisher()
        publisher.configure(should_succeed=False, failure_reason="Stream full")

        result = publisher.publish(_event())

        assert result.success is False
        assert result.failure_reason == "Stream full"
        assert publisher.events == []

    def test_configured_raise(self):
        publisher = FakeEventPublisher()
        publisher.configure(should_succeed=False, raise_error=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            publisher.publish(_event())


class TestPublisherFactory:
    @pytest.fixture(autouse=True)
    def _reset(self):
        yield
        reset_publisher()

    def test_set_publisher(self):
        fake = FakeEventPublisher()
        set_publisher(fake)
        assert get_publisher() is fake

    def test_default_is_redis_stream(self):
        reset_publisher()
        assert isinstance(get_publisher(), RedisStreamPublisher)

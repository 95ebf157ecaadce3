"""Runtime settings for the Reviews service, read from the environment.

Persistence settings are not here: the database, broker and event store
are configured per environment in ``domain.toml`` (selected by PROTEAN_ENV).
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    company_service_url: str = "http://localhost:8081"
    company_service_timeout: float = 2.0
    redis_url: str = "redis://localhost:6379/0"
    review_events_stream: str = "reviews::review-created"
    review_events_maxlen: int = 100_000
    event_publish_timeout: float = 1.0


def load_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    defaults = Settings()
    return Settings(
        company_service_url=os.getenv("COMPANY_SERVICE_URL", defaults.company_service_url),
        company_service_timeout=float(os.getenv("COMPANY_SERVICE_TIMEOUT", defaults.company_service_timeout)),
        redis_url=os.getenv("REDIS_URL", defaults.redis_url),
        review_events_stream=os.getenv("REVIEW_EVENTS_STREAM", defaults.review_events_stream),
        review_events_maxlen=int(os.getenv("REVIEW_EVENTS_MAXLEN", defaults.review_events_maxlen)),
        event_publish_timeout=float(os.getenv("EVENT_PUBLISH_TIMEOUT", defaults.event_publish_timeout)),
    )

"""Reviews bounded context — company reviews and ratings.

Handles the review lifecycle (create, read, update, delete), paginated,
sorted and rating-filtered listings, and per-company average ratings.
New reviews are only accepted for companies the company registry knows
about, and every accepted review is announced on the event stream.
"""

import structlog
from protean.domain import Domain

reviews = Domain(name="reviews")

logger = structlog.get_logger(__name__)

"""Review aggregate — a rated piece of feedback attached to one company.

Reviews are plain CRUD records: created once the company has been
validated, overwritten in place by updates, and hard-deleted.
"""

import math
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from reviews.domain import reviews


@reviews.aggregate
class Review:
    """A customer's review of a company."""

    title = String(max_length=255)
    description = Text()
    rating = Float(required=True)
    company_id = Identifier(required=True)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def rating_must_be_finite(self):
        if self.rating is not None and not math.isfinite(self.rating):
            raise ValidationError({"rating": ["Rating must be a finite number"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, company_id, rating, title=None, description=None):
        """Build a new review. Its identifier comes from the domain's ``identity_strategy``."""
        now = datetime.now(UTC)
        return cls(
            company_id=company_id,
            rating=rating,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------
    def overwrite(self, title, description, rating, company_id):
        """Replace all mutable fields. The company is not re-validated."""
        with atomic_change(self):
            self.title = title
            self.description = description
            self.rating = rating
            self.company_id = company_id
            self.updated_at = datetime.now(UTC)

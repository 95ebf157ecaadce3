"""Error taxonomy for review operations.

Creation failures are distinct types so callers can tell "company not
found" apart from "company service unavailable". Update and delete report
a missing review as a ``False`` outcome instead of raising.
"""


class ReviewsError(Exception):
    """Base class for all review errors."""


class NotFound(ReviewsError):
    """A referenced resource does not exist."""


class CompanyNotFound(NotFound):
    def __init__(self, company_id):
        self.company_id = company_id
        super().__init__(f"Company not found with id: {company_id}")


class DownstreamCommunicationError(ReviewsError):
    """A remote collaborator was unreachable, timed out, or answered garbage.

    The underlying failure is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, message, cause=None):
        self.cause = cause
        super().__init__(message)


class InvalidSortField(ReviewsError):
    def __init__(self, field, allowed):
        self.field = field
        self.allowed = tuple(allowed)
        super().__init__(f"Cannot sort reviews by '{field}'. Allowed fields: {', '.join(self.allowed)}")


class InvalidPageRequest(ReviewsError):
    def __init__(self, page, page_size):
        self.page = page
        self.page_size = page_size
        super().__init__(f"Invalid page request: page={page}, page_size={page_size}")


class PersistenceError(ReviewsError):
    """The review store failed in a way that is not otherwise classified."""

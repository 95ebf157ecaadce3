"""Review store factory.

Provides get_store() / set_store() to swap implementations:
- ProteanReviewStore for the domain's configured database (default)
- InMemoryReviewStore for tests and local experiments
"""

from reviews.store.port import ReviewStore
from reviews.store.protean_adapter import ProteanReviewStore

_current_store: ReviewStore | None = None


def get_store() -> ReviewStore:
    """Return the current review store. Defaults to ProteanReviewStore."""
    global _current_store
    if _current_store is None:
        _current_store = ProteanReviewStore()
    return _current_store


def set_store(store: ReviewStore) -> None:
    """Override the active review store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_store() -> None:
    """Reset to the default store."""
    global _current_store
    _current_store = None

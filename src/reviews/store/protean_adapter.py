"""Review store backed by the Reviews domain's configured database.

Uses the Protean repository for the Review aggregate, so the concrete
engine (memory, SQLite, PostgreSQL) is chosen by ``domain.toml``. Queries
are spelled out explicitly against the repository's DAO; results are read
in fixed-size batches so no provider default limit truncates a listing.
On SQL engines the company average is a single ``AVG`` query.

Must be called inside an active Reviews domain context.
"""

from contextlib import contextmanager

import structlog
from protean.adapters.repository.sqlalchemy import SADAO
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from sqlalchemy import func

from reviews.review.contracts import ReviewPage
from reviews.review.errors import PersistenceError
from reviews.review.review import Review
from reviews.store.port import ReviewStore, sorted_descending

logger = structlog.get_logger(__name__)

_BATCH_SIZE = 100


@contextmanager
def _translate_errors(operation):
    try:
        yield
    except PersistenceError:
        raise
    except Exception as exc:
        logger.error("Review store operation failed", operation=operation, error=str(exc))
        raise PersistenceError(f"Review store failed during {operation}: {exc}") from exc


class ProteanReviewStore(ReviewStore):
    """Repository-backed review store."""

    @property
    def _repo(self):
        return current_domain.repository_for(Review)

    def _read_all(self, queryset) -> list[Review]:
        items: list[Review] = []
        offset = 0
        while True:
            result = queryset.offset(offset).limit(_BATCH_SIZE).all()
            items.extend(result.items)
            offset += _BATCH_SIZE
            if offset >= result.total:
                return items

    def _company_query(self, company_id: str):
        return self._repo._dao.query.filter(company_id=str(company_id)).order_by("created_at")

    def save(self, review: Review) -> Review:
        with _translate_errors("save"):
            self._repo.add(review)
        return review

    def find_by_id(self, review_id: str) -> Review | None:
        with _translate_errors("find_by_id"):
            try:
                return self._repo.get(str(review_id))
            except ObjectNotFoundError:
                return None

    def find_all(self) -> list[Review]:
        with _translate_errors("find_all"):
            return self._read_all(self._repo._dao.query.order_by("created_at"))

    def find_by_company(self, company_id: str) -> list[Review]:
        with _translate_errors("find_by_company"):
            return self._read_all(self._company_query(company_id))

    def find_by_company_paged(self, company_id: str, page: int, page_size: int) -> ReviewPage:
        with _translate_errors("find_by_company_paged"):
            result = self._company_query(company_id).offset(page * page_size).limit(page_size).all()
        return ReviewPage(items=list(result.items), page=page, page_size=page_size, total=result.total)

    def find_by_company_sorted(self, company_id: str, field_name: str) -> list[Review]:
        # Sorted here rather than by the provider so missing titles and
        # descriptions order the same way on every engine.
        return sorted_descending(self.find_by_company(company_id), field_name)

    def find_by_company_and_rating_greater_than(self, company_id: str, rating: float) -> list[Review]:
        with _translate_errors("find_by_company_and_rating_greater_than"):
            return self._read_all(
                self._repo._dao.query.filter(company_id=str(company_id), rating__gt=rating).order_by("created_at")
            )

    def delete(self, review: Review) -> None:
        with _translate_errors("delete"):
            self._repo._dao.delete(review)

    def average_rating_by_company(self, company_id: str) -> float | None:
        with _translate_errors("average_rating_by_company"):
            dao = self._repo._dao
            if isinstance(dao, SADAO):
                return average_in_database(dao, company_id)
            ratings = [r.rating for r in self._read_all(dao.query.filter(company_id=str(company_id)))]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)


def average_in_database(dao, company_id: str) -> float | None:
    """``SELECT AVG(rating)`` for one company on a SQLAlchemy-backed DAO."""
    model = dao.database_model_cls
    conn = dao._get_session()
    try:
        average = conn.query(func.avg(model.rating)).filter(model.company_id == str(company_id)).scalar()
    finally:
        dao._commit_if_standalone(conn)
    return float(average) if average is not None else None

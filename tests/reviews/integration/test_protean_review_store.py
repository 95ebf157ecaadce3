"""Integration tests for ProteanReviewStore against the domain's configured database."""

import pytest
from reviews.review.errors import PersistenceError
from reviews.review.review import Review
from reviews.store import get_store, reset_store, set_store
from reviews.store.memory_adapter import InMemoryReviewStore
from reviews.store.protean_adapter import ProteanReviewStore, average_in_database
from sqlalchemy import Float, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool


@pytest.fixture()
def protean_store():
    return ProteanReviewStore()


@pytest.fixture()
def seeded(protean_store):
    reviews = [
        Review.create(company_id="acme", rating=3.0, title="Okay"),
        Review.create(company_id="acme", rating=5.0, title="Superb"),
        Review.create(company_id="globex", rating=1.0, title="Bad"),
        Review.create(company_id="acme", rating=4.0, title=None),
    ]
    for review in reviews:
        protean_store.save(review)
    return reviews


class TestPersistence:
    def test_save_then_find(self, protean_store):
        review = protean_store.save(Review.create(company_id="acme", rating=4.5, title="Nice"))

        found = protean_store.find_by_id(str(review.id))

        assert found is not None
        assert found.title == "Nice"
        assert found.rating == 4.5

    def test_missing_id_is_none(self, protean_store):
        assert protean_store.find_by_id("no-such-review") is None

    def test_save_existing_updates_in_place(self, protean_store, seeded):
        review = protean_store.find_by_id(str(seeded[0].id))
        review.overwrite(title="Edited", description="Now with text", rating=2.0, company_id="globex")
        protean_store.save(review)

        found = protean_store.find_by_id(str(seeded[0].id))
        assert found.title == "Edited"
        assert str(found.company_id) == "globex"
        assert len(protean_store.find_all()) == len(seeded)

    def test_delete(self, protean_store, seeded):
        protean_store.delete(protean_store.find_by_id(str(seeded[2].id)))
        assert protean_store.find_by_id(str(seeded[2].id)) is None


class TestQueries:
    def test_find_all_in_insertion_order(self, protean_store, seeded):
        assert [str(r.id) for r in protean_store.find_all()] == [str(r.id) for r in seeded]

    def test_find_by_company(self, protean_store, seeded):
        titles = [r.title for r in protean_store.find_by_company("acme")]
        assert titles == ["Okay", "Superb", None]

    def test_paged(self, protean_store, seeded):
        page = protean_store.find_by_company_paged("acme", page=1, page_size=2)

        assert [r.title for r in page.items] == [None]
        assert page.total == 3
        assert page.page == 1

    def test_sorted_descending(self, protean_store, seeded):
        ratings = [r.rating for r in protean_store.find_by_company_sorted("acme", "rating")]
        assert ratings == [5.0, 4.0, 3.0]

    def test_rating_strictly_greater_than(self, protean_store, seeded):
        ratings = sorted(r.rating for r in protean_store.find_by_company_and_rating_greater_than("acme", 3.0))
        assert ratings == [4.0, 5.0]

    def test_average(self, protean_store, seeded):
        assert protean_store.average_rating_by_company("acme") == 4.0
        assert protean_store.average_rating_by_company("initech") is None


class TestFailureTranslation:
    def test_unexpected_error_becomes_persistence_error(self, protean_store, monkeypatch):
        def broken_get(*args, **kwargs):
            raise RuntimeError("database went away")

        monkeypatch.setattr(type(protean_store._repo), "get", broken_get)

        with pytest.raises(PersistenceError) as exc:
            protean_store.find_by_id("anything")

        assert isinstance(exc.value.__cause__, RuntimeError)


class TestStoreFactory:
    @pytest.fixture(autouse=True)
    def _reset(self):
        yield
        reset_store()

    def test_default_is_protean_store(self):
        reset_store()
        assert isinstance(get_store(), ProteanReviewStore)

    def test_set_store(self):
        memory = InMemoryReviewStore()
        set_store(memory)
        assert get_store() is memory


class _Base(DeclarativeBase):
    pass


class _ReviewRow(_Base):
    __tablename__ = "review"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    company_id: Mapped[str] = mapped_column(String)
    rating: Mapped[float] = mapped_column(Float)


class _SqliteReviewDAO:
    """Exposes the session hooks of a SQLAlchemy DAO over an in-memory SQLite table."""

    database_model_cls = _ReviewRow

    def __init__(self, rows):
        engine = create_engine("sqlite://", poolclass=StaticPool)
        _Base.metadata.create_all(engine)
        self._sessions = sessionmaker(bind=engine)
        self.released = 0
        with self._sessions() as session:
            session.add_all(_ReviewRow(id=str(n), company_id=c, rating=r) for n, (c, r) in enumerate(rows))
            session.commit()

    def _get_session(self):
        return self._sessions()

    def _commit_if_standalone(self, conn):
        conn.commit()
        conn.close()
        self.released += 1


class TestDatabaseAverage:
    def test_exact_mean_of_one_company(self):
        dao = _SqliteReviewDAO([("acme", 1.0), ("acme", 2.0), ("acme", 2.0), ("globex", 5.0)])

        assert average_in_database(dao, "acme") == pytest.approx(5.0 / 3)
        assert dao.released == 1

    def test_company_without_reviews_is_none(self):
        dao = _SqliteReviewDAO([("acme", 4.0)])
        assert average_in_database(dao, "initech") is None

    def test_memory_provider_mean_is_not_rounded(self, protean_store):
        for rating in (1.0, 2.0, 2.0):
            protean_store.save(Review.create(company_id="acme", rating=rating))

        assert protean_store.average_rating_by_company("acme") == pytest.approx(5.0 / 3)

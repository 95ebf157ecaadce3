import pytest
from protean.integrations.pytest import DomainFixture
from reviews.company.fake_adapter import FakeCompanyValidator
from reviews.publisher.fake_adapter import FakeEventPublisher
from reviews.rating.aggregator import RatingAggregator
from reviews.review.orchestrator import ReviewOrchestrator
from reviews.store.memory_adapter import InMemoryReviewStore


@pytest.fixture(scope="session")
def reviews_bed():
    from reviews.domain import reviews

    bed = DomainFixture(reviews)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviews_bed):
    with reviews_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def store():
    return InMemoryReviewStore()


@pytest.fixture()
def validator():
    return FakeCompanyValidator(known_company_ids=["1", "2"])


@pytest.fixture()
def publisher():
    return FakeEventPublisher()


@pytest.fixture()
def orchestrator(store, validator, publisher):
    return ReviewOrchestrator(
        store=store,
        validator=validator,
        publisher=publisher,
        aggregator=RatingAggregator(store),
    )

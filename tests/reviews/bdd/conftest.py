"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from pytest_bdd import given, parsers, then
from reviews.review.errors import ReviewsError


@pytest.fixture()
def error():
    """Container for the error a step raised."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('company "{company_id}" is registered'))
def company_registered(validator, company_id):
    validator.add_company(company_id)


@given("the company registry is unreachable")
def registry_unreachable(validator):
    validator.configure(failure=ConnectionError("company service unreachable"))


@given("the event bus rejects messages")
def bus_rejects(publisher):
    publisher.configure(should_succeed=False, failure_reason="Stream unavailable")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the creation fails with "{error_name}"'))
def creation_fails(error, error_name):
    assert isinstance(error["exc"], ReviewsError)
    assert type(error["exc"]).__name__ == error_name


@then("the review is stored once")
def stored_once(store):
    assert len(store.calls_to("save")) == 1
    assert len(store.find_all()) == 1


@then("nothing is stored")
def nothing_stored(store):
    assert store.calls_to("save") == []


@then("no event is published")
def no_event(publisher):
    assert publisher.events == []

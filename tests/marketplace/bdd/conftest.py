"""Shared BDD fixtures and step definitions for the Marketplace domain."""

import pytest
from marketplace.listing.events import (
    ListingClosed,
    ListingPosted,
    ListingReopened,
    ListingReported,
    ListingReviewAdded,
)
from marketplace.listing.listing import DuplicateReviewError, Listing
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_LISTING_EVENT_CLASSES = {
    "ListingPosted": ListingPosted,
    "ListingReviewAdded": ListingReviewAdded,
    "ListingReported": ListingReported,
    "ListingClosed": ListingClosed,
    "ListingReopened": ListingReopened,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a {listing_type} listing "{title}" posted by "{poster_id}"'),
    target_fixture="listing",
)
def posted_listing(listing_type, title, poster_id):
    listing = Listing.post(
        listing_type=listing_type,
        title=title,
        posted_by_id=poster_id,
        posted_by_name=f"User {poster_id}",
        price=500.0,
    )
    listing._events.clear()
    return listing


@given(parsers.cfparse('"{reviewer_id}" has reviewed the listing with rating {rating:d}'))
def listing_has_review(listing, reviewer_id, rating):
    listing.add_review(
        reviewer_id=reviewer_id,
        reviewer_name=f"User {reviewer_id}",
        rating=rating,
        comment="Existing review.",
    )
    listing._events.clear()


@given(parsers.cfparse('"{reporter_id}" has reported the listing as "{reason:w}"'))
def listing_has_report(listing, reporter_id, reason):
    listing.report_listing(reporter_id=reporter_id, reason=reason, comment=None)
    listing._events.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the listing rating is {rating:g}"))
def listing_rating_is(listing, rating):
    assert listing.rating == pytest.approx(rating)


@then("the listing has no rating")
def listing_has_no_rating(listing):
    assert listing.rating is None


@then(parsers.cfparse("the listing has {count:d} reviews"))
def listing_has_n_reviews(listing, count):
    assert listing.review_count == count


@then("the listing is reported")
def listing_is_reported(listing):
    assert listing.is_reported is True


@then("the listing is not reported")
def listing_is_not_reported(listing):
    assert listing.is_reported is False


@then("the listing action fails with a validation error")
def listing_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the listing action fails as a duplicate review")
def listing_action_fails_duplicate(error):
    assert isinstance(error["exc"], DuplicateReviewError)


@then(parsers.cfparse("a {event_type} event is raised"))
def listing_event_raised(listing, event_type):
    event_cls = _LISTING_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in listing._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in listing._events]}"


@then("no events are raised")
def no_events_raised(listing):
    assert listing._events == []

"""Application tests for PostListing command handler."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from marketplace.listing.listing import Listing
from marketplace.listing.posting import PostListing


class TestPostListingCommand:
    def test_post_persists_listing(self):
        listing_id = current_domain.process(
            PostListing(
                listing_type="RideShare",
                title="Ride to Lekki this Friday",
                posted_by_id="user3",
                posted_by_name="Bob B.",
                contact_info="bob.b@example.com",
                details=json.dumps({"departure": "Main Gate", "destination": "Lekki Phase 1", "seats": 3}),
            ),
            asynchronous=False,
        )
        listing = current_domain.repository_for(Listing).get(listing_id)
        assert listing.listing_type == "RideShare"
        assert listing.title == "Ride to Lekki this Friday"
        assert json.loads(listing.details)["seats"] == 3
        assert listing.is_reported is False

    def test_post_returns_distinct_ids(self):
        first = current_domain.process(
            PostListing(listing_type="Food", title="Jollof Rice", posted_by_id="u1", posted_by_name="A"),
            asynchronous=False,
        )
        second = current_domain.process(
            PostListing(listing_type="Food", title="Meal Swipes", posted_by_id="u1", posted_by_name="A"),
            asynchronous=False,
        )
        assert first != second

    def test_unknown_listing_type_rejected(self):
        with pytest.raises(ValidationError):
            PostListing(listing_type="Spaceship", title="Nope", posted_by_id="u1", posted_by_name="A")

    def test_missing_title_rejected(self):
        with pytest.raises(ValidationError):
            PostListing(listing_type="Food", posted_by_id="u1", posted_by_name="A")

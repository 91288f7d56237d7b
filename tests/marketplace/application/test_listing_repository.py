"""Application tests for the ListingRepository store lookups."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from marketplace.listing.listing import Listing
from marketplace.listing.posting import PostListing


def _post_listing(listing_type, title):
    return current_domain.process(
        PostListing(listing_type=listing_type, title=title, posted_by_id="user2", posted_by_name="Alice W."),
        asynchronous=False,
    )


class TestGetListing:
    def test_resolves_by_id_and_type(self):
        listing_id = _post_listing("Tutor", "Calculus Tutoring")
        listing = current_domain.repository_for(Listing).get_listing(listing_id, "Tutor")
        assert str(listing.id) == listing_id

    def test_type_mismatch_not_found(self):
        listing_id = _post_listing("Tutor", "Calculus Tutoring")
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Listing).get_listing(listing_id, "Club")

    def test_unknown_id_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Listing).get_listing("missing", "Tutor")


class TestFindByType:
    def test_partitions_by_type(self):
        _post_listing("Food", "Jollof Rice")
        _post_listing("Food", "Meal Swipes")
        _post_listing("Club", "Robotics Club")

        repo = current_domain.repository_for(Listing)
        assert [listing.title for listing in repo.find_by_type("Food")] == ["Jollof Rice", "Meal Swipes"]
        assert [listing.title for listing in repo.find_by_type("Club")] == ["Robotics Club"]
        assert repo.find_by_type("Roommate") == []

    def test_returns_every_listing_past_one_hundred(self):
        for n in range(120):
            _post_listing("Food", f"Meal Pack {n}")
        _post_listing("Club", "Robotics Club")

        listings = current_domain.repository_for(Listing).find_by_type("Food")
        assert len(listings) == 120
        assert listings[0].title == "Meal Pack 0"
        assert listings[-1].title == "Meal Pack 119"

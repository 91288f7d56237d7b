"""Application tests for AddListingReview command handler."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from marketplace.listing.listing import DuplicateReviewError, Listing
from marketplace.listing.posting import PostListing
from marketplace.listing.reviewing import AddListingReview


def _post_listing(**overrides):
    defaults = {
        "listing_type": "PastQuestion",
        "title": "MTH101 Final Exam Questions",
        "posted_by_id": "user2",
        "posted_by_name": "Alice W.",
        "price": 500.0,
    }
    defaults.update(overrides)
    return current_domain.process(PostListing(**defaults), asynchronous=False)


def _add_review(listing_id, **overrides):
    defaults = {
        "listing_id": listing_id,
        "listing_type": "PastQuestion",
        "reviewer_id": "user1",
        "reviewer_name": "You",
        "rating": 4,
        "comment": "Good stuff, helped me pass.",
    }
    defaults.update(overrides)
    return current_domain.process(AddListingReview(**defaults), asynchronous=False)


class TestAddListingReviewCommand:
    def test_review_persists(self):
        listing_id = _post_listing()
        review_id = _add_review(listing_id)
        listing = current_domain.repository_for(Listing).get(listing_id)
        assert listing.review_count == 1
        assert str(listing.reviews[0].id) == review_id
        assert listing.rating == 4.0

    def test_rating_recomputed_across_commands(self):
        listing_id = _post_listing()
        _add_review(listing_id, reviewer_id="user3", rating=5)
        _add_review(listing_id, reviewer_id="user4", rating=4)
        _add_review(listing_id, reviewer_id="user1", rating=3, comment="ok")
        listing = current_domain.repository_for(Listing).get(listing_id)
        assert listing.rating == 4.0
        assert listing.review_count == 3

    def test_duplicate_reviewer_rejected(self):
        listing_id = _post_listing()
        _add_review(listing_id, reviewer_id="user1", rating=5)
        with pytest.raises(DuplicateReviewError):
            _add_review(listing_id, reviewer_id="user1", rating=2)
        listing = current_domain.repository_for(Listing).get(listing_id)
        assert listing.review_count == 1
        assert listing.rating == 5.0

    def test_invalid_rating_not_persisted(self):
        listing_id = _post_listing()
        with pytest.raises(ValidationError):
            _add_review(listing_id, rating=6)
        listing = current_domain.repository_for(Listing).get(listing_id)
        assert listing.review_count == 0
        assert listing.rating is None

    def test_unknown_listing_rejected(self):
        with pytest.raises(ObjectNotFoundError):
            _add_review("does-not-exist")

    def test_wrong_listing_type_rejected(self):
        listing_id = _post_listing()
        with pytest.raises(ObjectNotFoundError):
            _add_review(listing_id, listing_type="Textbook")

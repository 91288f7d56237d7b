"""AddListingReview — rate and comment on a listing.

The listing is resolved by id and type; the aggregate enforces the rating
range, a non-blank comment, and one review per reviewer before appending.
"""

import structlog
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.listing.listing import Listing, ListingType

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Listing")
class AddListingReview:
    listing_id = Identifier(required=True)
    listing_type = String(choices=ListingType, required=True)
    reviewer_id = Identifier(required=True)
    reviewer_name = String(required=True, max_length=100)
    reviewer_avatar = String(max_length=500)
    rating = Integer(required=True)
    comment = Text(required=True)


@marketplace.command_handler(part_of=Listing)
class AddListingReviewHandler:
    @handle(AddListingReview)
    def add_listing_review(self, command):
        repo = current_domain.repository_for(Listing)
        listing = repo.get_listing(command.listing_id, command.listing_type)

        review = listing.add_review(
            reviewer_id=command.reviewer_id,
            reviewer_name=command.reviewer_name,
            rating=command.rating,
            comment=command.comment,
            reviewer_avatar=command.reviewer_avatar,
        )
        repo.add(listing)

        logger.info(
            "Listing review added",
            listing_id=str(listing.id),
            reviewer_id=str(command.reviewer_id),
            rating=command.rating,
            average_rating=listing.rating,
            review_count=listing.review_count,
        )
        return str(review.id)

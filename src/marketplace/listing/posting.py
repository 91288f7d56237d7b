"""PostListing — publish a new listing of any marketplace type."""

import json

import structlog
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.listing.listing import Listing, ListingType

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Listing")
class PostListing:
    listing_type = String(choices=ListingType, required=True)
    title = String(required=True, max_length=200)
    posted_by_id = Identifier(required=True)
    posted_by_name = String(required=True, max_length=100)
    description = Text()
    price = Float(min_value=0.0)
    contact_info = String(max_length=255)
    details = Text()  # JSON object of type-specific attributes


@marketplace.command_handler(part_of=Listing)
class PostListingHandler:
    @handle(PostListing)
    def post_listing(self, command):
        details = json.loads(command.details) if command.details else None

        listing = Listing.post(
            listing_type=command.listing_type,
            title=command.title,
            posted_by_id=command.posted_by_id,
            posted_by_name=command.posted_by_name,
            description=command.description,
            price=command.price,
            contact_info=command.contact_info,
            details=details,
        )
        current_domain.repository_for(Listing).add(listing)

        logger.info(
            "Listing posted",
            listing_id=str(listing.id),
            listing_type=listing.listing_type,
            posted_by_id=str(command.posted_by_id),
        )
        return str(listing.id)

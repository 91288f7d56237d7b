"""CloseListing / ReopenListing — toggle the sold, resolved, or closed flag.

Only the poster can close or reopen, and only for listing types that have
a terminal state.
"""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.listing.listing import Listing, ListingType


@marketplace.command(part_of="Listing")
class CloseListing:
    listing_id = Identifier(required=True)
    listing_type = String(choices=ListingType, required=True)
    closed_by = Identifier(required=True)


@marketplace.command(part_of="Listing")
class ReopenListing:
    listing_id = Identifier(required=True)
    listing_type = String(choices=ListingType, required=True)
    reopened_by = Identifier(required=True)


@marketplace.command_handler(part_of=Listing)
class ClosingHandler:
    @handle(CloseListing)
    def close_listing(self, command):
        repo = current_domain.repository_for(Listing)
        listing = repo.get_listing(command.listing_id, command.listing_type)
        listing.close(closed_by=command.closed_by)
        repo.add(listing)

    @handle(ReopenListing)
    def reopen_listing(self, command):
        repo = current_domain.repository_for(Listing)
        listing = repo.get_listing(command.listing_id, command.listing_type)
        listing.reopen(reopened_by=command.reopened_by)
        repo.add(listing)

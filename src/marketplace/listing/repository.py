"""Repository for the Listing aggregate — the Listing Store.

All listing types share one repository; the type tag partitions it. Every
command handler resolves listings through ``get_listing`` so an id posted
under one type never resolves under another.
"""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.listing.listing import Listing, ListingType


@marketplace.repository(part_of=Listing)
class ListingRepository:
    def get_listing(self, listing_id: str, listing_type: str) -> Listing:
        """Fetch a listing by id within its listing type."""
        expected_type = ListingType(listing_type).value
        listing = self.get(listing_id)
        if listing.listing_type != expected_type:
            raise ObjectNotFoundError(
                {"listing": [f"{expected_type} listing with id {listing_id} does not exist"]}
            )
        return listing

    def find_by_type(self, listing_type: str) -> list[Listing]:
        """All listings of one type, in posting order."""
        expected_type = ListingType(listing_type).value
        return (
            self._dao.query.filter(listing_type=expected_type).order_by("posted_at").limit(None).all().items
        )

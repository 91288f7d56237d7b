"""ReportListing — flag a listing for moderation.

Reporting is idempotent: a listing that is already reported stays reported
and keeps its first report.
"""

import structlog
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.listing.listing import Listing, ListingType

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Listing")
class ReportListing:
    listing_id = Identifier(required=True)
    listing_type = String(choices=ListingType, required=True)
    reporter_id = Identifier(required=True)
    reason = String(required=True)  # ReportReason enum value
    comment = Text()


@marketplace.command_handler(part_of=Listing)
class ReportListingHandler:
    @handle(ReportListing)
    def report_listing(self, command):
        repo = current_domain.repository_for(Listing)
        listing = repo.get_listing(command.listing_id, command.listing_type)

        newly_reported = listing.report_listing(
            reporter_id=command.reporter_id,
            reason=command.reason,
            comment=command.comment,
        )

        if newly_reported:
            repo.add(listing)
            logger.info(
                "Listing reported",
                listing_id=str(listing.id),
                listing_type=listing.listing_type,
                reason=command.reason,
            )
        else:
            logger.info("Listing already reported", listing_id=str(listing.id))

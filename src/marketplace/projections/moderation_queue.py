"""ModerationQueue — reported listings awaiting moderator attention.

Rows are only ever added: there is no moderator resolution workflow yet.
"""

from protean.core.projector import on
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.listing.events import ListingReported
from marketplace.listing.listing import Listing


@marketplace.projection
class ModerationQueue:
    listing_id = Identifier(identifier=True, required=True)
    listing_type = String(required=True)
    title = String(required=True)
    reporter_id = Identifier(required=True)
    reason = String(required=True)
    comment = Text()
    reported_at = DateTime()


@marketplace.projector(projector_for=ModerationQueue, aggregates=[Listing])
class ModerationQueueProjector:
    @on(ListingReported)
    def on_listing_reported(self, event):
        current_domain.repository_for(ModerationQueue).add(
            ModerationQueue(
                listing_id=event.listing_id,
                listing_type=event.listing_type,
                title=event.title,
                reporter_id=event.reporter_id,
                reason=event.reason,
                comment=event.comment,
                reported_at=event.reported_at,
            )
        )

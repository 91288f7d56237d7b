"""Domain events for the Listing aggregate.

All events are versioned, immutable facts representing state changes.
Projectors use them to maintain the browse cards and the moderation queue.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Listing")
class ListingPosted:
    """A user posted a new marketplace listing."""

    __version__ = 1

    listing_id = Identifier(required=True)
    listing_type = String(required=True)
    title = String(required=True)
    price = Float()
    posted_by_id = Identifier(required=True)
    posted_by_name = String(required=True)
    posted_at = DateTime(required=True)
    details = Text()  # JSON object of type-specific attributes


@marketplace.event(part_of="Listing")
class ListingReviewAdded:
    """A user reviewed a listing; carries the recomputed rating."""

    __version__ = 1

    review_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    listing_type = String(required=True)
    reviewer_id = Identifier(required=True)
    reviewer_name = String(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    average_rating = Float(required=True)
    review_count = Integer(required=True)
    reviewed_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingReported:
    """A user reported a listing for moderation."""

    __version__ = 1

    listing_id = Identifier(required=True)
    listing_type = String(required=True)
    title = String(required=True)
    reporter_id = Identifier(required=True)
    reason = String(required=True)
    comment = Text()
    reported_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingClosed:
    """The poster marked the listing sold, resolved, or closed."""

    __version__ = 1

    listing_id = Identifier(required=True)
    listing_type = String(required=True)
    closure_kind = String(required=True)
    closed_by = Identifier(required=True)
    closed_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingReopened:
    """The poster cleared the sold / resolved / closed flag."""

    __version__ = 1

    listing_id = Identifier(required=True)
    listing_type = String(required=True)
    reopened_by = Identifier(required=True)
    reopened_at = DateTime(required=True)

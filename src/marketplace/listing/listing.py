"""Listing aggregate (CQRS) — the core of the Campus Marketplace domain.

Every marketplace listing type (textbook, tutor, sublet, food, ...) is the
same aggregate with a ``listing_type`` tag. Type-specific attributes live in
the ``details`` JSON blob; the shared behavior lives here once:

- Review append with rating aggregation (one review per reviewer)
- Reporting for moderation (idempotent flag)
- Closing as sold / resolved / closed, for types that have such a state

Moderation State Machine (2 states):
    ACTIVE → REPORTED
    REPORTED → (terminal)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from marketplace.domain import marketplace
from marketplace.listing.events import (
    ListingClosed,
    ListingPosted,
    ListingReopened,
    ListingReported,
    ListingReviewAdded,
)


class DuplicateReviewError(ValidationError):
    """The reviewer already has a review on this listing."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ListingType(Enum):
    PAST_QUESTION = "PastQuestion"
    TEXTBOOK = "Textbook"
    LECTURE_NOTE = "LectureNote"
    PROJECT_MATERIAL = "ProjectMaterial"
    DATA_COLLECTION_GIG = "DataCollectionGig"
    STUDY_GROUP = "StudyGroup"
    TUTOR = "Tutor"
    LOST_AND_FOUND = "LostAndFound"
    PEER_REVIEW_SERVICE = "PeerReviewService"
    THESIS_SUPPORT = "ThesisSupport"
    CLUB = "Club"
    EVENT_TICKET = "EventTicket"
    MERCHANDISE = "Merchandise"
    CAMPUS_HUSTLE = "CampusHustle"
    RENTAL = "Rental"
    RIDE_SHARE = "RideShare"
    BIKE_SCOOTER = "BikeScooter"
    SUBLET = "Sublet"
    ROOMMATE = "Roommate"
    FOOD = "Food"
    SECOND_HAND_GOOD = "SecondHandGood"
    ASO_EBI = "AsoEbi"


class ClosureKind(Enum):
    SOLD = "Sold"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class ReportReason(Enum):
    INACCURATE = "INACCURATE"
    SCAM = "SCAM"
    INAPPROPRIATE = "INAPPROPRIATE"
    SOLD = "SOLD"
    SPAM = "SPAM"
    OTHER = "OTHER"

    @property
    def label(self):
        return _REPORT_REASON_LABELS[self]


_REPORT_REASON_LABELS = {
    ReportReason.INACCURATE: "Inaccurate Information / Wrong Category",
    ReportReason.SCAM: "Scam or Fraudulent Listing",
    ReportReason.INAPPROPRIATE: "Inappropriate Content (e.g., offensive, explicit)",
    ReportReason.SOLD: "Item is Sold / No Longer Available",
    ReportReason.SPAM: "Spam / Repetitive Listing",
    ReportReason.OTHER: "Other (Please specify)",
}


# Terminal flag per listing type. Types missing here have no closed state.
_CLOSURE_KINDS = {
    ListingType.PAST_QUESTION: ClosureKind.SOLD,
    ListingType.TEXTBOOK: ClosureKind.SOLD,
    ListingType.LECTURE_NOTE: ClosureKind.SOLD,
    ListingType.PROJECT_MATERIAL: ClosureKind.SOLD,
    ListingType.EVENT_TICKET: ClosureKind.SOLD,
    ListingType.MERCHANDISE: ClosureKind.SOLD,
    ListingType.RENTAL: ClosureKind.SOLD,  # rented out
    ListingType.BIKE_SCOOTER: ClosureKind.SOLD,
    ListingType.SUBLET: ClosureKind.SOLD,
    ListingType.FOOD: ClosureKind.SOLD,
    ListingType.SECOND_HAND_GOOD: ClosureKind.SOLD,
    ListingType.ASO_EBI: ClosureKind.SOLD,
    ListingType.LOST_AND_FOUND: ClosureKind.RESOLVED,
    ListingType.DATA_COLLECTION_GIG: ClosureKind.CLOSED,
}


def closure_kind_for(listing_type):
    """Return the ClosureKind for a listing type, or None if it cannot be closed."""
    return _CLOSURE_KINDS.get(ListingType(listing_type))


def _validate_review_input(rating, comment):
    errors = {}
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        errors["rating"] = ["Rating must be a whole number between 1 and 5"]
    if comment is None or not str(comment).strip():
        errors["comment"] = ["Review comment cannot be empty"]
    if errors:
        raise ValidationError(errors)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Listing")
class ListingReport:
    """The report that moved a listing into moderation."""

    reason = String(choices=ReportReason, required=True)
    comment = Text()
    reporter_id = Identifier(required=True)
    reported_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Listing")
class ListingReview:
    """A rating and comment left on a listing.

    Reviewer name and avatar are a snapshot taken at submission time.
    """

    reviewer_id = Identifier(required=True)
    reviewer_name = String(required=True, max_length=100)
    reviewer_avatar = String(max_length=500)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)
    reviewed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Listing:
    """A campus marketplace listing of any type."""

    listing_type = String(choices=ListingType, required=True)

    # Content
    title = String(required=True, max_length=200)
    description = Text()
    price = Float(min_value=0.0)
    contact_info = String(max_length=255)
    details = Text()  # JSON object of type-specific attributes

    # Ownership
    posted_by_id = Identifier(required=True)
    posted_by_name = String(required=True, max_length=100)
    posted_at = DateTime()

    # Reviews
    reviews = HasMany(ListingReview)
    rating = Float()  # Mean of review ratings; None until the first review

    # Moderation
    is_reported = Boolean(default=False)
    report = ValueObject(ListingReport)

    # Terminal flag: sold / resolved / closed, depending on listing_type
    is_closed = Boolean(default=False)
    closed_at = DateTime()

    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def title_must_not_be_empty(self):
        if self.title is not None and len(self.title.strip()) == 0:
            raise ValidationError({"title": ["Listing title cannot be empty"]})

    @invariant.post
    def one_review_per_reviewer(self):
        reviewer_ids = [str(r.reviewer_id) for r in self.reviews]
        if len(reviewer_ids) != len(set(reviewer_ids)):
            raise ValidationError({"reviews": ["A reviewer can review a listing only once"]})

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def review_count(self):
        return len(self.reviews)

    @property
    def closure_kind(self):
        return closure_kind_for(self.listing_type)

    def has_review_from(self, reviewer_id):
        return any(str(r.reviewer_id) == str(reviewer_id) for r in self.reviews)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def post(
        cls,
        listing_type,
        title,
        posted_by_id,
        posted_by_name,
        description=None,
        price=None,
        contact_info=None,
        details=None,
    ):
        """Post a new listing."""
        now = datetime.now(UTC)

        listing = cls(
            listing_type=ListingType(listing_type).value,
            title=title,
            description=description,
            price=price,
            contact_info=contact_info,
            details=json.dumps(details) if details else None,
            posted_by_id=posted_by_id,
            posted_by_name=posted_by_name,
            posted_at=now,
            is_reported=False,
            is_closed=False,
            updated_at=now,
        )

        listing.raise_(
            ListingPosted(
                listing_id=str(listing.id),
                listing_type=listing.listing_type,
                title=title,
                price=price,
                posted_by_id=str(posted_by_id),
                posted_by_name=posted_by_name,
                posted_at=now,
                details=listing.details,
            )
        )

        return listing

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def add_review(self, reviewer_id, reviewer_name, rating, comment, reviewer_avatar=None):
        """Append a review and recompute the listing rating.

        Rejects out-of-range ratings, blank comments, and a second review
        from the same reviewer without touching the listing.
        """
        _validate_review_input(rating, comment)

        if self.has_review_from(reviewer_id):
            raise DuplicateReviewError({"review": ["You have already reviewed this listing"]})

        now = datetime.now(UTC)

        review = ListingReview(
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
            reviewer_avatar=reviewer_avatar,
            rating=rating,
            comment=comment,
            reviewed_at=now,
        )

        with atomic_change(self):
            self.add_reviews(review)
            ratings = [r.rating for r in self.reviews]
            self.rating = sum(ratings) / len(ratings)
            self.updated_at = now

        self.raise_(
            ListingReviewAdded(
                review_id=str(review.id),
                listing_id=str(self.id),
                listing_type=self.listing_type,
                reviewer_id=str(reviewer_id),
                reviewer_name=reviewer_name,
                rating=rating,
                comment=comment,
                average_rating=self.rating,
                review_count=self.review_count,
                reviewed_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def report_listing(self, reporter_id, reason, comment=None):
        """Flag the listing for moderation.

        Reporting an already reported listing succeeds without any change.
        Returns True when this call moved the listing into moderation.
        """
        try:
            report_reason = ReportReason(reason)
        except ValueError:
            raise ValidationError({"reason": [f"Unknown report reason: {reason}"]})

        if report_reason == ReportReason.OTHER and not (comment or "").strip():
            raise ValidationError({"comment": ["Please provide details for an 'Other' report reason"]})

        if self.is_reported:
            return False

        now = datetime.now(UTC)

        with atomic_change(self):
            self.is_reported = True
            self.report = ListingReport(
                reason=report_reason.value,
                comment=comment or None,
                reporter_id=reporter_id,
                reported_at=now,
            )
            self.updated_at = now

        self.raise_(
            ListingReported(
                listing_id=str(self.id),
                listing_type=self.listing_type,
                title=self.title,
                reporter_id=str(reporter_id),
                reason=report_reason.value,
                comment=comment or None,
                reported_at=now,
            )
        )

        return True

    # -------------------------------------------------------------------
    # Closing
    # -------------------------------------------------------------------
    def _assert_poster(self, user_id, action):
        if str(user_id) != str(self.posted_by_id):
            raise ValidationError({"listing": [f"Only the poster can {action} this listing"]})

    def close(self, closed_by):
        """Mark the listing sold, resolved, or closed depending on its type."""
        kind = self.closure_kind
        if kind is None:
            raise ValidationError({"listing": [f"{self.listing_type} listings cannot be closed"]})
        self._assert_poster(closed_by, "close")
        if self.is_closed:
            raise ValidationError({"listing": [f"Listing is already marked {kind.value}"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.is_closed = True
            self.closed_at = now
            self.updated_at = now

        self.raise_(
            ListingClosed(
                listing_id=str(self.id),
                listing_type=self.listing_type,
                closure_kind=kind.value,
                closed_by=str(closed_by),
                closed_at=now,
            )
        )

    def reopen(self, reopened_by):
        """Clear the sold / resolved / closed flag."""
        if self.closure_kind is None:
            raise ValidationError({"listing": [f"{self.listing_type} listings cannot be reopened"]})
        self._assert_poster(reopened_by, "reopen")
        if not self.is_closed:
            raise ValidationError({"listing": ["Listing is not closed"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.is_closed = False
            self.closed_at = None
            self.updated_at = now

        self.raise_(
            ListingReopened(
                listing_id=str(self.id),
                listing_type=self.listing_type,
                reopened_by=str(reopened_by),
                reopened_at=now,
            )
        )

"""FastAPI routes for the Campus Marketplace bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Listings are addressed by
type and id, so every write goes through the same store lookup.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    AddReviewRequest,
    CloseListingRequest,
    ListingCardListResponse,
    ListingCardResponse,
    ListingDetailResponse,
    ListingIdResponse,
    ModerationEntryResponse,
    ModerationQueueResponse,
    PostListingRequest,
    ReportListingRequest,
    ReviewIdResponse,
    ReviewResponse,
    StatusResponse,
)
from marketplace.listing.closing import CloseListing, ReopenListing
from marketplace.listing.listing import Listing, ListingType
from marketplace.listing.posting import PostListing
from marketplace.listing.reporting import ReportListing
from marketplace.listing.reviewing import AddListingReview
from marketplace.projections.listing_card import browsable_cards
from marketplace.projections.moderation_queue import ModerationQueue

listing_router = APIRouter(prefix="/listings", tags=["listings"])
moderation_router = APIRouter(prefix="/moderation", tags=["moderation"])


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------
@listing_router.post("", status_code=201, response_model=ListingIdResponse)
async def post_listing(body: PostListingRequest) -> ListingIdResponse:
    """Post a new listing."""
    command = PostListing(
        listing_type=body.listing_type,
        title=body.title,
        posted_by_id=body.posted_by_id,
        posted_by_name=body.posted_by_name,
        description=body.description,
        price=body.price,
        contact_info=body.contact_info,
        details=json.dumps(body.details) if body.details else None,
    )
    listing_id = current_domain.process(command, asynchronous=False)
    return ListingIdResponse(listing_id=listing_id)


@listing_router.get("", response_model=ListingCardListResponse)
async def browse_listings(
    listing_type: ListingType | None = None,
    q: str | None = None,
    title: str | None = None,
    course_code: str | None = None,
    university: str | None = None,
    year: str | None = None,
    author: str | None = None,
    course: str | None = None,
    isbn: str | None = None,
) -> ListingCardListResponse:
    """Browse listings, optionally of one type. Reported listings are hidden.

    `q` searches the title and type-specific details; the remaining
    parameters filter on individual details, e.g. `course_code` and `year`
    for past questions or `author` and `isbn` for textbooks.
    """
    filters = {
        "title": title,
        "course_code": course_code,
        "university": university,
        "year": year,
        "author": author,
        "course": course,
        "isbn": isbn,
    }
    cards = browsable_cards(listing_type.value if listing_type else None, q=q, filters=filters)
    return ListingCardListResponse(
        listings=[
            ListingCardResponse(
                listing_id=str(card.listing_id),
                listing_type=card.listing_type,
                title=card.title,
                price=card.price,
                posted_by_name=card.posted_by_name,
                rating=card.rating,
                review_count=card.review_count or 0,
                is_closed=bool(card.is_closed),
                details=json.loads(card.details) if card.details else {},
            )
            for card in cards
        ]
    )


@listing_router.get("/{listing_type}/{listing_id}", response_model=ListingDetailResponse)
async def get_listing(listing_type: ListingType, listing_id: str) -> ListingDetailResponse:
    """Get a listing with its reviews."""
    listing = current_domain.repository_for(Listing).get_listing(listing_id, listing_type.value)
    kind = listing.closure_kind
    return ListingDetailResponse(
        listing_id=str(listing.id),
        listing_type=listing.listing_type,
        title=listing.title,
        description=listing.description,
        price=listing.price,
        contact_info=listing.contact_info,
        details=json.loads(listing.details) if listing.details else {},
        posted_by_id=str(listing.posted_by_id),
        posted_by_name=listing.posted_by_name,
        posted_at=str(listing.posted_at) if listing.posted_at else None,
        rating=listing.rating,
        review_count=listing.review_count,
        reviews=[
            ReviewResponse(
                review_id=str(r.id),
                reviewer_id=str(r.reviewer_id),
                reviewer_name=r.reviewer_name,
                reviewer_avatar=r.reviewer_avatar,
                rating=r.rating,
                comment=r.comment,
                reviewed_at=str(r.reviewed_at),
            )
            for r in sorted(listing.reviews, key=lambda r: r.reviewed_at)
        ],
        is_reported=bool(listing.is_reported),
        is_closed=bool(listing.is_closed),
        closure_kind=kind.value if kind else None,
    )


@listing_router.post(
    "/{listing_type}/{listing_id}/reviews",
    status_code=201,
    response_model=ReviewIdResponse,
)
async def add_review(listing_type: ListingType, listing_id: str, body: AddReviewRequest) -> ReviewIdResponse:
    """Review a listing."""
    command = AddListingReview(
        listing_id=listing_id,
        listing_type=listing_type.value,
        reviewer_id=body.reviewer_id,
        reviewer_name=body.reviewer_name,
        reviewer_avatar=body.reviewer_avatar,
        rating=body.rating,
        comment=body.comment,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@listing_router.post(
    "/{listing_type}/{listing_id}/reports",
    status_code=201,
    response_model=StatusResponse,
)
async def report_listing(listing_type: ListingType, listing_id: str, body: ReportListingRequest) -> StatusResponse:
    """Report a listing for moderation."""
    command = ReportListing(
        listing_id=listing_id,
        listing_type=listing_type.value,
        reporter_id=body.reporter_id,
        reason=body.reason,
        comment=body.comment or None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@listing_router.put("/{listing_type}/{listing_id}/close", response_model=StatusResponse)
async def close_listing(listing_type: ListingType, listing_id: str, body: CloseListingRequest) -> StatusResponse:
    """Mark a listing sold, resolved, or closed."""
    command = CloseListing(
        listing_id=listing_id,
        listing_type=listing_type.value,
        closed_by=body.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@listing_router.put("/{listing_type}/{listing_id}/reopen", response_model=StatusResponse)
async def reopen_listing(listing_type: ListingType, listing_id: str, body: CloseListingRequest) -> StatusResponse:
    """Reopen a closed listing."""
    command = ReopenListing(
        listing_id=listing_id,
        listing_type=listing_type.value,
        reopened_by=body.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------
@moderation_router.get("/queue", response_model=ModerationQueueResponse)
async def get_moderation_queue() -> ModerationQueueResponse:
    """List reported listings, oldest report first."""
    repo = current_domain.repository_for(ModerationQueue)
    entries = repo._dao.query.order_by("reported_at").limit(None).all().items
    return ModerationQueueResponse(
        entries=[
            ModerationEntryResponse(
                listing_id=str(e.listing_id),
                listing_type=e.listing_type,
                title=e.title,
                reporter_id=str(e.reporter_id),
                reason=e.reason,
                comment=e.comment,
                reported_at=str(e.reported_at) if e.reported_at else None,
            )
            for e in entries
        ]
    )

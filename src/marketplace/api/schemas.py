"""Pydantic request/response schemas for the Marketplace API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PostListingRequest(BaseModel):
    listing_type: str
    title: str = Field(max_length=200)
    posted_by_id: str
    posted_by_name: str
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    contact_info: str | None = None
    details: dict[str, Any] | None = None


class AddReviewRequest(BaseModel):
    reviewer_id: str
    reviewer_name: str
    reviewer_avatar: str | None = None
    rating: int = Field(ge=1, le=5)
    comment: str


class ReportListingRequest(BaseModel):
    reporter_id: str
    reason: str  # ReportReason value, e.g. "SCAM"
    comment: str = ""


class CloseListingRequest(BaseModel):
    user_id: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ListingIdResponse(BaseModel):
    listing_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ReviewResponse(BaseModel):
    review_id: str
    reviewer_id: str
    reviewer_name: str
    reviewer_avatar: str | None = None
    rating: int
    comment: str
    reviewed_at: str


class ListingDetailResponse(BaseModel):
    listing_id: str
    listing_type: str
    title: str
    description: str | None = None
    price: float | None = None
    contact_info: str | None = None
    details: dict[str, Any] = {}
    posted_by_id: str
    posted_by_name: str
    posted_at: str | None = None
    rating: float | None = None
    review_count: int = 0
    reviews: list[ReviewResponse] = []
    is_reported: bool = False
    is_closed: bool = False
    closure_kind: str | None = None


class ListingCardResponse(BaseModel):
    listing_id: str
    listing_type: str
    title: str
    price: float | None = None
    posted_by_name: str | None = None
    rating: float | None = None
    review_count: int = 0
    is_closed: bool = False
    details: dict[str, Any] = {}


class ListingCardListResponse(BaseModel):
    listings: list[ListingCardResponse]


class ModerationEntryResponse(BaseModel):
    listing_id: str
    listing_type: str
    title: str
    reporter_id: str
    reason: str
    comment: str | None = None
    reported_at: str | None = None


class ModerationQueueResponse(BaseModel):
    entries: list[ModerationEntryResponse]

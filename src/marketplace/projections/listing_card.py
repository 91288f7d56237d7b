"""ListingCard — browse view of marketplace listings, one card per listing.

Browsing hides reported listings. Within a type, cards can be narrowed by
free text over the title and type-specific details, and by individual
detail fields (course code, university, year, author, ISBN, ...).
"""

import json

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.listing.events import (
    ListingClosed,
    ListingPosted,
    ListingReopened,
    ListingReported,
    ListingReviewAdded,
)
from marketplace.listing.listing import Listing


@marketplace.projection
class ListingCard:
    listing_id = Identifier(identifier=True, required=True)
    listing_type = String(required=True)
    title = String(required=True)
    price = Float()
    posted_by_name = String()
    rating = Float()  # None until the first review ("New")
    review_count = Integer(default=0)
    is_closed = Boolean(default=False)
    is_reported = Boolean(default=False)
    posted_at = DateTime()
    details = Text()  # JSON copy of the listing's type-specific attributes


def _detail_values(card):
    return json.loads(card.details) if card.details else {}


def _normalize_isbn(value):
    return str(value).strip().replace("-", "")


def _field_matches(card, field_name, wanted):
    if field_name == "title":
        actual = card.title
    else:
        actual = _detail_values(card).get(field_name)
    if actual is None:
        return False

    if field_name == "year":
        return str(actual) == str(wanted).strip()
    if field_name == "isbn":
        return _normalize_isbn(wanted) in _normalize_isbn(actual)
    return str(wanted).strip().lower() in str(actual).lower()


def card_matches(card, q=None, filters=None):
    """Whether a card satisfies a free-text query and every field filter.

    ``q`` is a case-insensitive substring of the title or of any detail
    value. Field filters are matched against the title or the named detail:
    ``year`` must be equal, ``isbn`` ignores hyphens, the rest are
    case-insensitive substrings. Blank filters are ignored.
    """
    if q and q.strip():
        needle = q.strip().lower()
        haystack = [card.title or ""] + [str(v) for v in _detail_values(card).values()]
        if not any(needle in text.lower() for text in haystack):
            return False

    for field_name, wanted in (filters or {}).items():
        if wanted is None or not str(wanted).strip():
            continue
        if not _field_matches(card, field_name, wanted):
            return False
    return True


def browsable_cards(listing_type=None, q=None, filters=None):
    """Cards visible to shoppers: reported listings are hidden, newest first."""
    repo = current_domain.repository_for(ListingCard)
    criteria = {"is_reported": False}
    if listing_type:
        criteria["listing_type"] = listing_type
    cards = repo._dao.query.filter(**criteria).order_by("-posted_at").limit(None).all().items
    return [card for card in cards if card_matches(card, q=q, filters=filters)]


@marketplace.projector(projector_for=ListingCard, aggregates=[Listing])
class ListingCardProjector:
    @on(ListingPosted)
    def on_listing_posted(self, event):
        current_domain.repository_for(ListingCard).add(
            ListingCard(
                listing_id=event.listing_id,
                listing_type=event.listing_type,
                title=event.title,
                price=event.price,
                posted_by_name=event.posted_by_name,
                review_count=0,
                is_closed=False,
                is_reported=False,
                posted_at=event.posted_at,
                details=event.details,
            )
        )

    @on(ListingReviewAdded)
    def on_listing_review_added(self, event):
        repo = current_domain.repository_for(ListingCard)
        card = repo.get(event.listing_id)
        card.rating = event.average_rating
        card.review_count = event.review_count
        repo.add(card)

    @on(ListingReported)
    def on_listing_reported(self, event):
        repo = current_domain.repository_for(ListingCard)
        card = repo.get(event.listing_id)
        card.is_reported = True
        repo.add(card)

    @on(ListingClosed)
    def on_listing_closed(self, event):
        repo = current_domain.repository_for(ListingCard)
        card = repo.get(event.listing_id)
        card.is_closed = True
        repo.add(card)

    @on(ListingReopened)
    def on_listing_reopened(self, event):
        repo = current_domain.repository_for(ListingCard)
        card = repo.get(event.listing_id)
        card.is_closed = False
        repo.add(card)

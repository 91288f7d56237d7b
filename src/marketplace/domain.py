"""Campus Marketplace bounded context — Listings, Reviews, and Moderation.

Handles the listing lifecycle shared by every marketplace listing type
(textbooks, tutoring, rides, sublets, food, ...): posting, reviewing with
rating aggregation, reporting for moderation, and closing sold or resolved
listings.
"""

import structlog
from protean.domain import Domain

marketplace = Domain(name="marketplace")

logger = structlog.get_logger(__name__)

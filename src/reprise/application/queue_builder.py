"""
Queue builder for review sessions.

Builds the globally ordered review queue across collections:
1. Flatten cards from every collection, in collection order
2. Keep cards whose next review is at or before `now`
3. Sort oldest-due first (stable, so ties keep collection order)
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from reprise.domain.models import CardRecord, Collection, as_utc

logger = logging.getLogger(__name__)


def build_due_queue(
    collections: Iterable[Collection],
    now: datetime | None = None,
) -> list[CardRecord]:
    """
    Build the review queue of every card due across the given collections.

    Args:
        collections: Collections to draw from; may be empty.
        now: Reference instant; defaults to the current UTC time.

    Returns:
        Due cards ordered ascending by next_review_at. Unbounded; callers
        paginate if they need to.
    """
    now = as_utc(now)
    due = [card for collection in collections for card in collection if card.is_due(now)]
    due.sort(key=lambda c: c.next_review_at)
    logger.debug(f"Due queue: {len(due)} cards at {now.isoformat()}")
    return due


def due_cards(collection: Collection, now: datetime | None = None) -> list[CardRecord]:
    """Due cards of a single collection, oldest-due first."""
    return build_due_queue([collection], now)


def new_cards(collection: Collection) -> list[CardRecord]:
    """Never-reviewed cards, oldest authored first."""
    return sorted((c for c in collection if c.is_new), key=lambda c: c.created_at)

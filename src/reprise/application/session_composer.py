"""
Session composer for bounded, shuffled study sessions.

Mixes new material with due reviews from one collection and shuffles the
result so the answer order cannot be memorized.
"""

import logging
import random
from datetime import datetime

from reprise.domain.constants import DEFAULT_MAX_NEW, DEFAULT_MAX_REVIEW
from reprise.domain.models import CardRecord, Collection, as_utc
from reprise.domain.ports import RandomSource

from .queue_builder import new_cards

logger = logging.getLogger(__name__)

_system_random = random.SystemRandom()


def build_session(
    collection: Collection,
    now: datetime | None = None,
    max_new: int = DEFAULT_MAX_NEW,
    max_review: int = DEFAULT_MAX_REVIEW,
    rng: RandomSource | None = None,
) -> list[CardRecord]:
    """
    Compose a study session from one collection.

    Takes up to `max_new` never-reviewed cards (oldest authored first) and up
    to `max_review` due review cards (most overdue first), then shuffles the
    combined selection. Fewer cards are returned when fewer are available.

    Args:
        collection: The deck to study.
        now: Reference instant; defaults to the current UTC time.
        max_new: Cap on new cards.
        max_review: Cap on due review cards.
        rng: Shuffle source; pass a seeded random.Random for reproducible order.

    Returns:
        The session cards in shuffled order. Callers must not rely on positions.
    """
    if max_new < 0 or max_review < 0:
        raise ValueError(
            f"Session caps must be non-negative (max_new={max_new}, max_review={max_review})"
        )

    now = as_utc(now)

    fresh = new_cards(collection)[:max_new]
    reviews = [c for c in collection if not c.is_new and c.is_due(now)]
    reviews.sort(key=lambda c: c.next_review_at)
    reviews = reviews[:max_review]

    session = fresh + reviews
    (rng or _system_random).shuffle(session)

    logger.debug(
        f"Session for {collection.id}: {len(fresh)} new + {len(reviews)} review "
        f"(caps {max_new}/{max_review})"
    )
    return session

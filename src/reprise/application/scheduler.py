"""
SM-2 derived scheduler.

Computes a card's next review state from its current state and a review
outcome. Plain functions with no module state: the only thing touched is
the card passed in, so a host may serialize access per card however it likes.
"""

import logging
import math
from datetime import datetime, timedelta

from reprise.domain.constants import (
    AGAIN_EASE_PENALTY,
    EASY_EASE_BONUS,
    EASY_INTERVAL_MULTIPLIER,
    FIRST_EASY_INTERVAL,
    FIRST_GOOD_INTERVAL,
    MAX_EASE_FACTOR,
    MAX_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    RELEARN_DELAY,
    SECOND_GOOD_INTERVAL,
)
from reprise.domain.models import CardRecord, Outcome, as_utc

logger = logging.getLogger(__name__)

_CEIL_TOLERANCE = 1e-9


def apply_outcome(
    card: CardRecord,
    outcome: Outcome | str,
    now: datetime | None = None,
) -> CardRecord:
    """
    Record a review outcome on a card, mutating it in place.

    Args:
        card: The card being reviewed.
        outcome: Again, Good or Easy (an Outcome or its string value).
        now: Instant the review is recorded; defaults to the current UTC time.

    Returns:
        The same card, with interval, ease, next review and counters updated.
    """
    outcome = Outcome(outcome)
    now = as_utc(now)

    ease, interval = _read_state(card)
    new_interval, new_ease = _next_state(interval, ease, outcome)

    card.interval_days = new_interval
    card.ease_factor = new_ease
    card.next_review_at = _due_at(now, new_interval, outcome)

    if outcome is Outcome.AGAIN:
        card.again_count += 1
    elif outcome is Outcome.GOOD:
        card.good_count += 1
    else:
        card.easy_count += 1

    card.review_count += 1
    card.last_reviewed_at = now

    logger.debug(
        f"{card.id}: {outcome.value} -> interval={new_interval}d "
        f"ease={new_ease} next={card.next_review_at.isoformat()}"
    )
    return card


def preview_next_review(
    card: CardRecord,
    outcome: Outcome | str,
    now: datetime | None = None,
) -> datetime:
    """
    Estimate when the card would be due if answered with `outcome`.

    The card is not modified.
    """
    outcome = Outcome(outcome)
    now = as_utc(now)
    ease, interval = _read_state(card)
    new_interval, _ = _next_state(interval, ease, outcome)
    return _due_at(now, new_interval, outcome)


def preview_intervals(card: CardRecord, now: datetime | None = None) -> dict[Outcome, datetime]:
    """Next-review instant for every possible outcome, as shown under answer buttons."""
    now = as_utc(now)
    return {outcome: preview_next_review(card, outcome, now) for outcome in Outcome}


def clamp_ease(value: float) -> float:
    return min(MAX_EASE_FACTOR, max(MIN_EASE_FACTOR, value))


def _read_state(card: CardRecord) -> tuple[float, int]:
    """
    Read ease and interval, clamping corrupted values back into range.

    Out-of-range input means upstream corruption; it is logged and never
    written back out of range.
    """
    ease = card.ease_factor
    interval = card.interval_days

    if not MIN_EASE_FACTOR <= ease <= MAX_EASE_FACTOR:
        logger.warning(f"{card.id}: ease_factor {ease} out of range, clamping")
        ease = clamp_ease(ease)
    if interval < 0:
        logger.warning(f"{card.id}: negative interval_days {interval}, resetting to 0")
        interval = 0

    return ease, interval


def _next_state(interval: int, ease: float, outcome: Outcome) -> tuple[int, float]:
    if outcome is Outcome.AGAIN:
        return 0, clamp_ease(ease - AGAIN_EASE_PENALTY)

    if outcome is Outcome.GOOD:
        if interval == 0:
            new_interval = FIRST_GOOD_INTERVAL
        elif interval == 1:
            new_interval = SECOND_GOOD_INTERVAL
        else:
            new_interval = _ceil(interval * ease)
        return new_interval, ease

    if interval == 0:
        new_interval = FIRST_EASY_INTERVAL
    else:
        new_interval = _ceil(interval * ease * EASY_INTERVAL_MULTIPLIER)
    return new_interval, clamp_ease(ease + EASY_EASE_BONUS)


def _ceil(value: float) -> int:
    # 10 * 1.3 == 13.000000000000002 must still give 13.
    return min(MAX_INTERVAL_DAYS, math.ceil(value - _CEIL_TOLERANCE))


def _due_at(now: datetime, interval_days: int, outcome: Outcome) -> datetime:
    if outcome is Outcome.AGAIN:
        return now + RELEARN_DELAY
    return now + timedelta(days=interval_days)

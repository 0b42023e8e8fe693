"""
Metrics calculator for deriving per-card insights from scheduling state.

This is a pure computation module with no I/O.
"""

from dataclasses import dataclass
from datetime import datetime

from reprise.domain.constants import (
    DEVELOPING_MAX_REVIEWS,
    DEVELOPING_MIN_EASE,
    PROFICIENT_MAX_REVIEWS,
    PROFICIENT_MIN_EASE,
)
from reprise.domain.models import CardRecord, MasteryLevel, as_utc


@dataclass
class EnrichedCardStats:
    """
    Card scheduling state enriched with computed metrics.
    """

    # Original record
    card_id: str
    ease_factor: float
    interval_days: int
    review_count: int
    next_review_at: datetime
    front: str | None

    # Computed metrics
    success_rate: float
    mastery_level: MasteryLevel
    mastery_progress: float  # 0.0-1.0 toward the next level
    days_overdue: int  # Negative if not yet due


class MetricsCalculator:
    """
    Computes derived metrics from CardRecord objects.

    Stateless and side-effect free.
    """

    def enrich(self, card: CardRecord, now: datetime | None = None) -> EnrichedCardStats:
        """
        Enrich a card with computed metrics.
        """
        now = as_utc(now)
        return EnrichedCardStats(
            card_id=card.id,
            ease_factor=card.ease_factor,
            interval_days=card.interval_days,
            review_count=card.review_count,
            next_review_at=card.next_review_at,
            front=card.front,
            success_rate=card.success_rate,
            mastery_level=self.mastery_level(card),
            mastery_progress=self.mastery_progress(card),
            days_overdue=self._compute_days_overdue(card, now),
        )

    def mastery_level(self, card: CardRecord) -> MasteryLevel:
        """
        Classify a card by review count and ease factor.
        """
        if card.review_count == 0:
            return MasteryLevel.LEARNING
        if card.review_count < DEVELOPING_MAX_REVIEWS or card.ease_factor < DEVELOPING_MIN_EASE:
            return MasteryLevel.DEVELOPING
        if card.review_count < PROFICIENT_MAX_REVIEWS or card.ease_factor < PROFICIENT_MIN_EASE:
            return MasteryLevel.PROFICIENT
        return MasteryLevel.MASTERED

    def mastery_progress(self, card: CardRecord) -> float:
        """
        Progress toward the next mastery level, from 0.0 to 1.0.

        Half the weight comes from review count, half from ease factor.
        """
        level = self.mastery_level(card)
        reviews = card.review_count
        ease = card.ease_factor

        if level is MasteryLevel.LEARNING:
            return 0.0
        if level is MasteryLevel.DEVELOPING:
            review_part = _unit(reviews / DEVELOPING_MAX_REVIEWS)
            ease_part = _unit((ease - 2.0) / (DEVELOPING_MIN_EASE - 2.0))
            return review_part * 0.5 + ease_part * 0.5
        if level is MasteryLevel.PROFICIENT:
            review_span = PROFICIENT_MAX_REVIEWS - DEVELOPING_MAX_REVIEWS
            ease_span = PROFICIENT_MIN_EASE - DEVELOPING_MIN_EASE
            review_part = _unit((reviews - DEVELOPING_MAX_REVIEWS) / review_span)
            ease_part = _unit((ease - DEVELOPING_MIN_EASE) / ease_span)
            return review_part * 0.5 + ease_part * 0.5
        return 1.0

    def _compute_days_overdue(self, card: CardRecord, now: datetime) -> int:
        """
        Whole days past the due instant (negative if not yet due).
        """
        return int((now - card.next_review_at).total_seconds() // 86400)


def _unit(value: float) -> float:
    return min(1.0, max(0.0, value))

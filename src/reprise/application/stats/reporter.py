"""
Statistics reporter for collections.

Pure read-only aggregation; nothing here mutates a card.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from reprise.application.queue_builder import build_due_queue
from reprise.domain.constants import DEFAULT_EASE_FACTOR, SECONDS_PER_CARD
from reprise.domain.models import Collection, MasteryLevel, as_utc

from .metrics_calculator import MetricsCalculator


@dataclass
class CollectionStatistics:
    """Aggregate metrics for one collection at a given instant."""

    total_cards: int
    due_cards: int
    new_cards: int
    total_reviews: int

    average_success_rate: float = 0.0
    average_ease: float = DEFAULT_EASE_FACTOR
    last_reviewed_at: datetime | None = None
    mastery_breakdown: dict[MasteryLevel, int] = field(
        default_factory=lambda: {level: 0 for level in MasteryLevel}
    )

    def as_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["mastery_breakdown"] = {k.value: v for k, v in self.mastery_breakdown.items()}
        d["last_reviewed_at"] = (
            self.last_reviewed_at.isoformat() if self.last_reviewed_at else None
        )
        return d


def estimate_daily_minutes(
    collections: Iterable[Collection],
    now: datetime | None = None,
    seconds_per_card: int = SECONDS_PER_CARD,
) -> int:
    """
    Estimate minutes needed to clear every currently-due card.

    Rounded down to whole minutes.
    """
    due_count = len(build_due_queue(collections, now))
    return (due_count * seconds_per_card) // 60


def collection_statistics(
    collection: Collection,
    now: datetime | None = None,
    calculator: MetricsCalculator | None = None,
) -> CollectionStatistics:
    """
    Summarize a collection.

    due_cards counts every card whose next review has elapsed, including
    never-reviewed cards; new_cards counts cards with no reviews.
    """
    now = as_utc(now)
    calc = calculator or MetricsCalculator()
    cards = collection.cards

    if not cards:
        return CollectionStatistics(total_cards=0, due_cards=0, new_cards=0, total_reviews=0)

    breakdown = {level: 0 for level in MasteryLevel}
    for card in cards:
        breakdown[calc.mastery_level(card)] += 1

    reviewed_at = [c.last_reviewed_at for c in cards if c.last_reviewed_at is not None]

    return CollectionStatistics(
        total_cards=len(cards),
        due_cards=sum(1 for c in cards if c.is_due(now)),
        new_cards=sum(1 for c in cards if c.is_new),
        total_reviews=sum(c.review_count for c in cards),
        average_success_rate=sum(c.success_rate for c in cards) / len(cards),
        average_ease=sum(c.ease_factor for c in cards) / len(cards),
        last_reviewed_at=max(reviewed_at) if reviewed_at else None,
        mastery_breakdown=breakdown,
    )

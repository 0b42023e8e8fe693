"""
Stats Service: application layer orchestrator.

Coordinates loading collections from the repository and summarizing them.
"""

import logging
from datetime import datetime

from reprise.domain.constants import SECONDS_PER_CARD
from reprise.domain.models import as_utc
from reprise.domain.ports import CollectionRepository

from .metrics_calculator import EnrichedCardStats, MetricsCalculator
from .reporter import CollectionStatistics, collection_statistics, estimate_daily_minutes

logger = logging.getLogger(__name__)


class StatsService:
    """
    Application service for collection statistics.

    Depends on the CollectionRepository abstraction, not a concrete adapter.
    """

    def __init__(
        self,
        repo: CollectionRepository,
        calculator: MetricsCalculator | None = None,
        seconds_per_card: int = SECONDS_PER_CARD,
    ):
        """
        Args:
            repo: The repository (port) for loading collections.
            calculator: Optional custom calculator; uses default if not provided.
            seconds_per_card: Average review time used for workload estimates.
        """
        self._repo = repo
        self._calc = calculator or MetricsCalculator()
        self._seconds_per_card = seconds_per_card

    def daily_minutes(self, now: datetime | None = None) -> int:
        return estimate_daily_minutes(
            self._repo.list_collections(), now, seconds_per_card=self._seconds_per_card
        )

    def statistics_for(
        self, collection_id: str, now: datetime | None = None
    ) -> CollectionStatistics:
        collection = self._repo.get_collection(collection_id)
        return collection_statistics(collection, now, calculator=self._calc)

    def all_statistics(self, now: datetime | None = None) -> dict[str, CollectionStatistics]:
        """
        Statistics for every collection, keyed by collection id.
        """
        now = as_utc(now)
        return {
            c.id: collection_statistics(c, now, calculator=self._calc)
            for c in self._repo.list_collections()
        }

    def enriched_cards(
        self, collection_id: str, now: datetime | None = None
    ) -> list[EnrichedCardStats]:
        """
        Per-card metrics for a collection, weakest (lowest success rate) first.
        """
        now = as_utc(now)
        collection = self._repo.get_collection(collection_id)
        enriched = [self._calc.enrich(card, now) for card in collection]
        enriched.sort(key=lambda e: (e.success_rate, e.ease_factor))
        logger.debug(f"Enriched {len(enriched)} cards for {collection_id}")
        return enriched

# Application Stats Package
from .metrics_calculator import EnrichedCardStats, MetricsCalculator
from .reporter import CollectionStatistics, collection_statistics, estimate_daily_minutes
from .service import StatsService

__all__ = [
    "MetricsCalculator",
    "EnrichedCardStats",
    "CollectionStatistics",
    "collection_statistics",
    "estimate_daily_minutes",
    "StatsService",
]

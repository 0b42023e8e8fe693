"""reprise: SM-2 spaced-repetition scheduling engine."""

from reprise.application.queue_builder import build_due_queue
from reprise.application.scheduler import apply_outcome, preview_intervals, preview_next_review
from reprise.application.session_composer import build_session
from reprise.application.stats import collection_statistics, estimate_daily_minutes
from reprise.consts import VERSION
from reprise.domain.models import CardRecord, Collection, Outcome

__version__ = VERSION

__all__ = [
    "CardRecord",
    "Collection",
    "Outcome",
    "apply_outcome",
    "preview_next_review",
    "preview_intervals",
    "build_due_queue",
    "build_session",
    "estimate_daily_minutes",
    "collection_statistics",
]

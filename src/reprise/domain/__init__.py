# Domain Package
from .exceptions import (
    CardNotFoundError,
    CollectionNotFoundError,
    DeckFileError,
    InvariantViolation,
    RepriseError,
)
from .models import CardRecord, Collection, MasteryLevel, Outcome, StreakState
from .ports import CollectionRepository, RandomSource

__all__ = [
    "CardRecord",
    "Collection",
    "MasteryLevel",
    "Outcome",
    "StreakState",
    "CollectionRepository",
    "RandomSource",
    "RepriseError",
    "InvariantViolation",
    "CardNotFoundError",
    "CollectionNotFoundError",
    "DeckFileError",
]

"""
Ports (interfaces) for reprise.

These define the contracts that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, MutableSequence, Protocol

from .models import CardRecord, Collection, StreakState


class RandomSource(Protocol):
    """
    Source of randomness for session shuffling.

    random.Random and random.SystemRandom both satisfy this; tests pass a
    seeded random.Random for reproducible orders.
    """

    def shuffle(self, x: MutableSequence[Any]) -> None: ...


class CollectionRepository(ABC):
    """
    Port for loading and persisting collections.

    Implementations:
        - YamlCollectionRepository: Single YAML deck file on disk.
    """

    @abstractmethod
    def list_collections(self) -> list[Collection]:
        """Return every collection, in stored order."""
        pass

    @abstractmethod
    def get_collection(self, collection_id: str) -> Collection:
        """
        Raises:
            CollectionNotFoundError: If no collection has this id.
        """
        pass

    @abstractmethod
    def find_card(self, card_id: str) -> tuple[Collection, CardRecord]:
        """
        Locate a card and the collection that owns it.

        Raises:
            CardNotFoundError: If no collection contains the card.
        """
        pass

    @abstractmethod
    def save(self) -> None:
        """Persist all collections, content and scheduling fields together."""
        pass

    @abstractmethod
    def load_streak(self) -> StreakState:
        pass

    @abstractmethod
    def save_streak(self, state: StreakState) -> None:
        pass

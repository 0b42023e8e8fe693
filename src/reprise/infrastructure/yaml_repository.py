"""
YAML Collection Repository: infrastructure adapter for a single deck file.

Implements CollectionRepository by keeping every collection, with each
card's content and scheduling fields side by side, in one YAML document.
"""

import logging
import os
import tempfile
import threading
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import yaml
import yaml.constructor
from pydantic import BaseModel, Field, ValidationError, field_validator

from reprise.application.id_service import generate_collection_id
from reprise.domain.constants import DEFAULT_EASE_FACTOR
from reprise.domain.exceptions import (
    CardNotFoundError,
    CollectionNotFoundError,
    DeckFileError,
    InvariantViolation,
)
from reprise.domain.models import CardRecord, Collection, StreakState, normalize_tag
from reprise.domain.ports import CollectionRepository

logger = logging.getLogger(__name__)

FILE_VERSION = 1


class UniqueKeyLoader(yaml.SafeLoader):
    """
    YAML loader that forbids duplicate keys.
    """

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            seen.add(key)
        return super().construct_mapping(node, deep)


# ---------- File schema ----------


def _aware(v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class CardDocument(BaseModel):
    id: str
    front: str | None = None
    back: str | None = None
    created_at: datetime
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    next_review_at: datetime
    review_count: int = 0
    again_count: int = 0
    good_count: int = 0
    easy_count: int = 0
    last_reviewed_at: datetime | None = None

    @field_validator("created_at", "next_review_at", "last_reviewed_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return _aware(v)


class CollectionDocument(BaseModel):
    id: str
    label: str
    tag: str = ""
    created_at: datetime
    cards: list[CardDocument] = Field(default_factory=list)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return _aware(v)


class StreakDocument(BaseModel):
    current: int = 0
    longest: int = 0
    last_study_date: date | None = None


class DeckFileDocument(BaseModel):
    version: int = FILE_VERSION
    streak: StreakDocument = Field(default_factory=StreakDocument)
    collections: list[CollectionDocument] = Field(default_factory=list)


# ---------- Repository ----------


class YamlCollectionRepository(CollectionRepository):
    """
    Loads collections from a YAML deck file and writes them back atomically.

    The file is read lazily on first access. A missing file is an empty library.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._collections: list[Collection] | None = None
        self._streak = StreakState()

    # --- CollectionRepository ---

    def list_collections(self) -> list[Collection]:
        return list(self._loaded())

    def get_collection(self, collection_id: str) -> Collection:
        for collection in self._loaded():
            if collection.id == collection_id:
                return collection
        raise CollectionNotFoundError(collection_id)

    def find_card(self, card_id: str) -> tuple[Collection, CardRecord]:
        for collection in self._loaded():
            if card_id in collection:
                return collection, collection.get_card(card_id)
        raise CardNotFoundError(card_id)

    def save(self) -> None:
        document = self._to_document()
        text = yaml.safe_dump(
            document.model_dump(mode="json"),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        logger.info(f"Saved {len(self._loaded())} collections to {self.path}")

    def load_streak(self) -> StreakState:
        self._loaded()
        return self._streak

    def save_streak(self, state: StreakState) -> None:
        self._loaded()
        self._streak = state
        self.save()

    # --- Extras used by the CLI host ---

    def find_or_create_collection(self, label: str) -> Collection:
        """
        Find a collection by normalized tag, creating it if needed.

        Normalizing avoids duplicate decks such as "Biology" and " biology".
        """
        tag = normalize_tag(label)
        for collection in self._loaded():
            if collection.tag == tag:
                return collection

        collection = Collection(id=generate_collection_id(), label=label.strip(), tag=tag)
        self._loaded().append(collection)
        logger.info(f"Created collection '{collection.label}' ({collection.id})")
        return collection

    def add_card(self, collection: Collection, card: CardRecord) -> None:
        """Add a card, keeping card ids unique across the whole file."""
        for other in self._loaded():
            if card.id in other:
                raise ValueError(f"Card {card.id} already belongs to collection {other.id}")
        collection.add_card(card)

    # --- Internals ---

    def _loaded(self) -> list[Collection]:
        if self._collections is None:
            self._collections, self._streak = self._read()
        return self._collections

    def _read(self) -> tuple[list[Collection], StreakState]:
        if not self.path.exists():
            logger.debug(f"No deck file at {self.path}, starting empty")
            return [], StreakState()

        try:
            raw = yaml.load(self.path.read_text(encoding="utf-8"), Loader=UniqueKeyLoader) or {}
        except yaml.YAMLError as e:
            raise DeckFileError(f"Invalid YAML in {self.path}: {e}") from e

        try:
            document = DeckFileDocument.model_validate(raw)
        except ValidationError as e:
            raise DeckFileError(f"Invalid deck file {self.path}: {e}") from e

        if document.version > FILE_VERSION:
            raise DeckFileError(
                f"{self.path} has version {document.version}; "
                f"this reprise supports up to {FILE_VERSION}"
            )

        collections = [_collection_from_document(doc) for doc in document.collections]

        collection_ids: set[str] = set()
        for collection in collections:
            if collection.id in collection_ids:
                raise DeckFileError(
                    f"Collection {collection.id} appears more than once in {self.path}"
                )
            collection_ids.add(collection.id)

        seen: dict[str, str] = {}
        for collection in collections:
            for card in collection:
                if card.id in seen:
                    raise DeckFileError(
                        f"Card {card.id} appears in both {seen[card.id]} and {collection.id}"
                    )
                seen[card.id] = collection.id
                try:
                    card.validate()
                except InvariantViolation as e:
                    raise DeckFileError(f"Corrupt scheduling state in {self.path}: {e}") from e

        streak = StreakState(
            current=document.streak.current,
            longest=document.streak.longest,
            last_study_date=document.streak.last_study_date,
        )
        logger.debug(f"Loaded {len(collections)} collections from {self.path}")
        return collections, streak

    def _to_document(self) -> DeckFileDocument:
        return DeckFileDocument(
            version=FILE_VERSION,
            streak=StreakDocument(
                current=self._streak.current,
                longest=self._streak.longest,
                last_study_date=self._streak.last_study_date,
            ),
            collections=[_collection_to_document(c) for c in self._loaded()],
        )


def _collection_from_document(doc: CollectionDocument) -> Collection:
    return Collection(
        id=doc.id,
        label=doc.label,
        tag=doc.tag,
        created_at=doc.created_at,
        cards=[CardRecord(**card.model_dump()) for card in doc.cards],
    )


def _collection_to_document(collection: Collection) -> CollectionDocument:
    return CollectionDocument(
        id=collection.id,
        label=collection.label,
        tag=collection.tag,
        created_at=collection.created_at,
        cards=[CardDocument.model_validate(_card_fields(card)) for card in collection],
    )


def _card_fields(card: CardRecord) -> dict[str, Any]:
    return {
        "id": card.id,
        "front": card.front,
        "back": card.back,
        "created_at": card.created_at,
        "ease_factor": card.ease_factor,
        "interval_days": card.interval_days,
        "next_review_at": card.next_review_at,
        "review_count": card.review_count,
        "again_count": card.again_count,
        "good_count": card.good_count,
        "easy_count": card.easy_count,
        "last_reviewed_at": card.last_reviewed_at,
    }

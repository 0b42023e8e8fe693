"""
Domain models for flashcard scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterator

from .constants import DEFAULT_EASE_FACTOR, MAX_EASE_FACTOR, MIN_EASE_FACTOR
from .exceptions import CardNotFoundError, InvariantViolation


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(now: datetime | None = None) -> datetime:
    """Reference instant: current UTC time when omitted, naive values read as UTC."""
    if now is None:
        return utcnow()
    return now if now.tzinfo else now.replace(tzinfo=timezone.utc)


class Outcome(str, Enum):
    """User's self-assessment of recall quality for one review."""

    AGAIN = "again"
    GOOD = "good"
    EASY = "easy"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _OUTCOME_DESCRIPTIONS[self]


_OUTCOME_DESCRIPTIONS = {
    Outcome.AGAIN: "I didn't recall this. Show it again soon.",
    Outcome.GOOD: "I recalled it with effort. Normal interval.",
    Outcome.EASY: "Perfect recall! Extend the interval.",
}


class MasteryLevel(str, Enum):
    LEARNING = "learning"
    DEVELOPING = "developing"
    PROFICIENT = "proficient"
    MASTERED = "mastered"


@dataclass
class CardRecord:
    """
    Scheduling state owned by a single flashcard.

    Attributes:
        id: Opaque unique identifier.
        ease_factor: Interval growth multiplier, kept within [1.3, 3.0].
        interval_days: Days until the next review after the last success.
        next_review_at: Instant the card becomes due.
        review_count: Total outcomes recorded (again + good + easy).
        last_reviewed_at: Instant of the last recorded outcome, None if never reviewed.
        created_at: When the card was authored; orders new cards.
        front / back: Display text owned by the content layer.
    """

    id: str
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    next_review_at: datetime = field(default_factory=utcnow)
    review_count: int = 0
    again_count: int = 0
    good_count: int = 0
    easy_count: int = 0
    last_reviewed_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    front: str | None = None
    back: str | None = None

    @classmethod
    def new(
        cls,
        card_id: str,
        front: str | None = None,
        back: str | None = None,
        now: datetime | None = None,
    ) -> "CardRecord":
        """Author a card with default scheduling state, due immediately."""
        now = as_utc(now)
        return cls(id=card_id, next_review_at=now, created_at=now, front=front, back=back)

    @property
    def is_new(self) -> bool:
        return self.review_count == 0

    def is_due(self, now: datetime) -> bool:
        return self.next_review_at <= as_utc(now)

    @property
    def success_rate(self) -> float:
        """Fraction of reviews answered Good or Easy."""
        if self.review_count == 0:
            return 0.0
        return (self.good_count + self.easy_count) / self.review_count

    def validate(self) -> None:
        """Raise InvariantViolation if the scheduling state is corrupt."""
        if not MIN_EASE_FACTOR <= self.ease_factor <= MAX_EASE_FACTOR:
            raise InvariantViolation(
                f"{self.id}: ease_factor {self.ease_factor} outside "
                f"[{MIN_EASE_FACTOR}, {MAX_EASE_FACTOR}]"
            )
        if self.interval_days < 0:
            raise InvariantViolation(f"{self.id}: negative interval_days {self.interval_days}")
        counters = (self.review_count, self.again_count, self.good_count, self.easy_count)
        if any(c < 0 for c in counters):
            raise InvariantViolation(f"{self.id}: negative review counter")
        if self.review_count != self.again_count + self.good_count + self.easy_count:
            raise InvariantViolation(
                f"{self.id}: review_count {self.review_count} != "
                f"again + good + easy ({self.again_count + self.good_count + self.easy_count})"
            )
        if self.last_reviewed_at is not None and self.next_review_at < self.last_reviewed_at:
            raise InvariantViolation(f"{self.id}: next_review_at precedes last_reviewed_at")


@dataclass
class Collection:
    """
    An ordered group of cards representing a topic deck.

    The collection owns membership: removing a card from its collection
    is equivalent to deleting it.
    """

    id: str
    label: str
    tag: str = ""
    created_at: datetime = field(default_factory=utcnow)
    cards: list[CardRecord] = field(default_factory=list)

    def __post_init__(self):
        if not self.tag:
            self.tag = normalize_tag(self.label)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[CardRecord]:
        return iter(self.cards)

    def __contains__(self, card_id: object) -> bool:
        return any(c.id == card_id for c in self.cards)

    def add_card(self, card: CardRecord) -> None:
        if card.id in self:
            raise ValueError(f"Card {card.id} is already in collection {self.id}")
        self.cards.append(card)

    def get_card(self, card_id: str) -> CardRecord:
        for card in self.cards:
            if card.id == card_id:
                return card
        raise CardNotFoundError(card_id)

    def remove_card(self, card_id: str) -> CardRecord:
        card = self.get_card(card_id)
        self.cards.remove(card)
        return card


def normalize_tag(label: str) -> str:
    return label.strip().lower()


@dataclass(frozen=True)
class StreakState:
    """
    Daily study streak.

    Attributes:
        current: Consecutive calendar days with a completed session.
        longest: Longest streak ever recorded.
        last_study_date: Calendar day of the last completed session.
    """

    current: int = 0
    longest: int = 0
    last_study_date: date | None = None

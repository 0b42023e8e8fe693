from datetime import datetime, timedelta, timezone

import pytest

from reprise.domain.models import CardRecord, Collection

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_card(now):
    """Factory for cards with explicit scheduling state."""
    counter = iter(range(1, 1_000_000))

    def _make(
        card_id=None,
        *,
        due_in=timedelta(0),
        reviews=0,
        ease=2.5,
        interval=0,
        created=None,
        **kwargs,
    ):
        card_id = card_id or f"card_{next(counter):04d}"
        card = CardRecord(
            id=card_id,
            ease_factor=ease,
            interval_days=interval,
            next_review_at=now + due_in,
            review_count=reviews,
            good_count=reviews,
            created_at=created or now - timedelta(days=30),
            **kwargs,
        )
        if reviews:
            card.last_reviewed_at = min(card.next_review_at, now) - timedelta(days=1)
        return card

    return _make


@pytest.fixture
def make_collection():
    def _make(cards=(), collection_id="col_test", label="Test"):
        return Collection(id=collection_id, label=label, cards=list(cards))

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and deck files
    monkeypatch.setenv("HOME", str(home))
    for var in ("REPRISE_DECK_FILE", "REPRISE_MAX_NEW", "REPRISE_MAX_REVIEW", "REPRISE_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    return home

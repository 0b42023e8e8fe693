"""Tests for CardRecord and Collection domain models."""

from datetime import timedelta

import pytest

from reprise.domain.exceptions import CardNotFoundError, InvariantViolation
from reprise.domain.models import CardRecord, Collection, Outcome


class TestCardRecord:
    def test_new_card_defaults(self, now):
        card = CardRecord.new("c1", front="Q", back="A", now=now)

        assert card.ease_factor == 2.5
        assert card.interval_days == 0
        assert card.next_review_at == now
        assert card.created_at == now
        assert card.review_count == 0
        assert card.again_count == card.good_count == card.easy_count == 0
        assert card.last_reviewed_at is None
        assert card.is_new
        assert card.is_due(now)
        card.validate()

    def test_success_rate(self, make_card):
        card = make_card(reviews=0)
        assert card.success_rate == 0.0

        card = CardRecord(
            id="c", review_count=4, again_count=1, good_count=2, easy_count=1
        )
        assert card.success_rate == 0.75

    def test_is_due_boundary(self, make_card, now):
        card = make_card(due_in=timedelta(0))
        assert card.is_due(now)
        assert not card.is_due(now - timedelta(seconds=1))

    @pytest.mark.parametrize(
        "changes",
        [
            {"ease_factor": 1.29},
            {"ease_factor": 3.01},
            {"interval_days": -1},
            {"review_count": 2},
            {"good_count": -1, "review_count": -1},
        ],
    )
    def test_validate_rejects_corrupt_state(self, now, changes):
        card = CardRecord.new("c1", now=now)
        for key, value in changes.items():
            setattr(card, key, value)

        with pytest.raises(InvariantViolation):
            card.validate()

    def test_validate_rejects_review_scheduled_in_past(self, now):
        card = CardRecord(
            id="c1",
            review_count=1,
            good_count=1,
            last_reviewed_at=now,
            next_review_at=now - timedelta(minutes=1),
        )
        with pytest.raises(InvariantViolation):
            card.validate()


class TestCollection:
    def test_tag_defaults_to_normalized_label(self):
        collection = Collection(id="col", label="  Biology ")
        assert collection.tag == "biology"

    def test_add_get_remove(self, now):
        collection = Collection(id="col", label="Bio")
        card = CardRecord.new("c1", now=now)
        collection.add_card(card)

        assert len(collection) == 1
        assert "c1" in collection
        assert collection.get_card("c1") is card
        assert collection.remove_card("c1") is card
        assert len(collection) == 0

    def test_add_duplicate_rejected(self, now):
        collection = Collection(id="col", label="Bio")
        collection.add_card(CardRecord.new("c1", now=now))

        with pytest.raises(ValueError):
            collection.add_card(CardRecord.new("c1", now=now))

    def test_missing_card(self):
        collection = Collection(id="col", label="Bio")
        with pytest.raises(CardNotFoundError) as exc:
            collection.get_card("nope")
        assert exc.value.card_id == "nope"
        with pytest.raises(KeyError):
            collection.remove_card("nope")

    def test_iteration_preserves_order(self, now):
        collection = Collection(id="col", label="Bio")
        for cid in ("b", "a", "c"):
            collection.add_card(CardRecord.new(cid, now=now))
        assert [c.id for c in collection] == ["b", "a", "c"]


def test_outcome_labels():
    assert Outcome("good") is Outcome.GOOD
    assert Outcome.AGAIN.display_name == "Again"
    assert "Extend" in Outcome.EASY.description

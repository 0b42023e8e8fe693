"""Tests for the due-queue builder."""

from datetime import timedelta

from reprise.application.queue_builder import build_due_queue, due_cards, new_cards


def test_returns_only_due_cards_oldest_first(make_card, make_collection, now):
    due = [make_card(f"due_{h}", due_in=timedelta(hours=-h), reviews=1) for h in (3, 1, 5, 2, 4)]
    later = [make_card(f"later_{d}", due_in=timedelta(days=d), reviews=1) for d in range(1, 11)]
    collection = make_collection(due + later)

    queue = build_due_queue([collection], now)

    assert [c.id for c in queue] == ["due_5", "due_4", "due_3", "due_2", "due_1"]


def test_merges_collections(make_card, make_collection, now):
    a = make_collection([make_card("a1", due_in=timedelta(hours=-1))], collection_id="a")
    b = make_collection(
        [make_card("b1", due_in=timedelta(hours=-2)), make_card("b2", due_in=timedelta(hours=1))],
        collection_id="b",
    )

    queue = build_due_queue([a, b], now)

    assert [c.id for c in queue] == ["b1", "a1"]


def test_due_exactly_now_is_included(make_card, make_collection, now):
    collection = make_collection([make_card("edge", due_in=timedelta(0))])
    assert [c.id for c in build_due_queue([collection], now)] == ["edge"]


def test_ties_keep_collection_order(make_card, make_collection, now):
    a = make_collection([make_card("a1"), make_card("a2")], collection_id="a")
    b = make_collection([make_card("b1")], collection_id="b")

    assert [c.id for c in build_due_queue([a, b], now)] == ["a1", "a2", "b1"]


def test_empty_inputs(make_collection, now):
    assert build_due_queue([], now) == []
    assert build_due_queue([make_collection()], now) == []


def test_read_only_and_idempotent(make_card, make_collection, now):
    cards = [make_card(due_in=timedelta(hours=-h)) for h in range(5)]
    collection = make_collection(cards)
    before = [(c.id, c.next_review_at, c.review_count) for c in collection]

    first = build_due_queue([collection], now)
    second = build_due_queue([collection], now)

    assert first == second
    assert [(c.id, c.next_review_at, c.review_count) for c in collection] == before
    assert [c.id for c in collection] == [c.id for c in cards]


def test_accepts_generator(make_card, make_collection, now):
    collections = (make_collection([make_card("x")]) for _ in range(1))
    assert len(build_due_queue(collections, now)) == 1


def test_due_cards_single_collection(make_card, make_collection, now):
    collection = make_collection(
        [make_card("soon", due_in=timedelta(hours=2)), make_card("now", due_in=timedelta(0))]
    )
    assert [c.id for c in due_cards(collection, now)] == ["now"]


def test_new_cards_oldest_authored_first(make_card, make_collection, now):
    collection = make_collection(
        [
            make_card("young", created=now - timedelta(days=1)),
            make_card("seen", reviews=2),
            make_card("old", created=now - timedelta(days=9)),
        ]
    )
    assert [c.id for c in new_cards(collection)] == ["old", "young"]


def test_naive_reference_time_is_read_as_utc(make_card, make_collection, now):
    collection = make_collection(
        [make_card("due", due_in=timedelta(minutes=-1)), make_card("later", due_in=timedelta(1))]
    )

    queue = build_due_queue([collection], now.replace(tzinfo=None))

    assert [c.id for c in queue] == ["due"]

"""reprise CLI: review queues, study sessions, outcomes and statistics over a deck file."""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Annotated

import typer

from reprise.domain.models import Outcome
from reprise.interface._common import (
    _resolve_with_overrides,
    card_summary,
    handle_errors,
    open_repository,
    reference_time,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="reprise: spaced-repetition scheduling for flashcard decks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage reprise configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    deck_file: Annotated[
        Path | None, typer.Option("--deck-file", help="YAML deck file. Defaults to config.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    now: Annotated[
        str | None,
        typer.Option("--now", hidden=True, help="Reference time (ISO-8601) instead of the clock."),
    ] = None,
):
    """Global settings for reprise."""
    ctx.ensure_object(dict)
    config = _resolve_with_overrides(
        deck_file=deck_file, verbose=(verbose + 1) if verbose else None
    )
    ctx.obj["config"] = config
    ctx.obj["now"] = now

    level = logging.DEBUG if config.verbose >= 2 else logging.INFO
    if config.verbose == 0:
        level = logging.WARNING
    logging.getLogger("reprise").setLevel(level)


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    label: Annotated[str, typer.Argument(help="Deck label; created if missing.")],
    front: Annotated[str, typer.Argument(help="Question side.")],
    back: Annotated[str, typer.Argument(help="Answer side.")],
):
    """[bold green]Add[/bold green] a new card to a deck."""
    from reprise.application.id_service import generate_card_id
    from reprise.domain.models import CardRecord

    with handle_errors():
        repo = open_repository(ctx)
        collection = repo.find_or_create_collection(label)
        card = CardRecord.new(generate_card_id(), front=front, back=back, now=reference_time(ctx))
        repo.add_card(collection, card)
        repo.save()

    typer.echo(f"Added {card.id} to '{collection.label}' ({collection.id})")


@app.command()
def review(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card to review.")],
    outcome: Annotated[Outcome, typer.Argument(help="How well you recalled it.")],
):
    """Record a review outcome and reschedule the card."""
    from reprise.application.scheduler import apply_outcome

    with handle_errors():
        repo = open_repository(ctx)
        _, card = repo.find_card(card_id)
        apply_outcome(card, outcome, reference_time(ctx))
        repo.save()

    typer.secho(
        f"{card.id}: {outcome.display_name} -> next review in {card.interval_days}d "
        f"({card.next_review_at.isoformat()}), ease {card.ease_factor:.2f}",
        fg="green",
    )


@app.command()
def preview(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card to preview.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show when a card would be due for each possible answer."""
    from reprise.application.scheduler import preview_intervals

    with handle_errors():
        _, card = open_repository(ctx).find_card(card_id)
        previews = preview_intervals(card, reference_time(ctx))

    if json_output:
        payload = {o.value: when.isoformat() for o, when in previews.items()}
        typer.echo(json.dumps(payload, indent=2))
        return

    for o, when in previews.items():
        typer.echo(f"{o.display_name:<6} {when.isoformat()}  {o.description}")


# ---------------------------------------------------------------------------
# Queues and sessions
# ---------------------------------------------------------------------------


@app.command("queue")
def queue(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option(help="Show at most this many cards.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List every due card across all decks, most overdue first."""
    from reprise.application.queue_builder import build_due_queue

    with handle_errors():
        collections = open_repository(ctx).list_collections()
        due = build_due_queue(collections, reference_time(ctx))

    shown = due[:limit] if limit is not None else due

    if json_output:
        payload = {"total": len(due), "cards": [card_summary(c) for c in shown]}
        typer.echo(json.dumps(payload, indent=2))
        return

    if not due:
        typer.secho("No cards due.", fg="yellow")
        return

    typer.echo(f"Due cards: {len(due)}")
    for card in shown:
        typer.echo(f"  {card.id}  {card.next_review_at.isoformat()}  {card.front or ''}")


@app.command()
def session(
    ctx: typer.Context,
    collection_id: Annotated[str, typer.Argument(help="Deck to study.")],
    max_new: Annotated[int | None, typer.Option(help="Cap on new cards.")] = None,
    max_review: Annotated[int | None, typer.Option(help="Cap on due review cards.")] = None,
    seed: Annotated[
        int | None, typer.Option(help="Seed the shuffle for a repeatable order.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Compose a shuffled study session of new and due cards."""
    from reprise.application.session_composer import build_session

    config = ctx.obj["config"]
    max_new = config.max_new if max_new is None else max_new
    max_review = config.max_review if max_review is None else max_review
    if max_new < 0 or max_review < 0:
        raise typer.BadParameter("--max-new and --max-review must be non-negative")

    rng = random.Random(seed) if seed is not None else None

    with handle_errors():
        collection = open_repository(ctx).get_collection(collection_id)
        cards = build_session(
            collection, reference_time(ctx), max_new=max_new, max_review=max_review, rng=rng
        )

    if json_output:
        typer.echo(json.dumps([card_summary(c) for c in cards], indent=2))
        return

    if not cards:
        typer.secho("Nothing to study right now.", fg="yellow")
        return

    n_new = sum(1 for c in cards if c.is_new)
    typer.echo(f"Session for '{collection.label}': {len(cards)} cards ({n_new} new)")
    for card in cards:
        marker = "new" if card.is_new else "due"
        typer.echo(f"  [{marker}] {card.id}  {card.front or ''}")


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


@app.command()
def stats(
    ctx: typer.Context,
    collection_id: Annotated[
        str | None, typer.Argument(help="Deck to summarize. Defaults to all decks.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show due/new/review counts and the estimated daily workload."""
    from reprise.application.stats import StatsService

    config = ctx.obj["config"]
    now = reference_time(ctx)

    with handle_errors():
        service = StatsService(open_repository(ctx), seconds_per_card=config.seconds_per_card)
        if collection_id:
            per_collection = {collection_id: service.statistics_for(collection_id, now)}
        else:
            per_collection = service.all_statistics(now)
        minutes = service.daily_minutes(now)

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "estimated_daily_minutes": minutes,
                    "collections": {cid: s.as_dict() for cid, s in per_collection.items()},
                },
                indent=2,
            )
        )
        return

    typer.echo(f"Estimated review time today: {minutes} min")
    for cid, s in per_collection.items():
        typer.echo(
            f"  {cid}: {s.total_cards} cards, {s.due_cards} due, {s.new_cards} new, "
            f"{s.total_reviews} reviews, success {s.average_success_rate:.0%}"
        )


@app.command()
def streak(
    ctx: typer.Context,
    record: Annotated[
        bool, typer.Option("--record", help="Record a completed session for today.")
    ] = False,
):
    """Show the daily study streak, optionally recording today's session."""
    from reprise.application.streaks import current_streak, record_session_completion

    today = reference_time(ctx).astimezone().date()

    with handle_errors():
        repo = open_repository(ctx)
        state = repo.load_streak()
        if record:
            state = record_session_completion(state, today)
            repo.save_streak(state)

    typer.echo(f"Current streak: {current_streak(state, today)} days (longest {state.longest})")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = ctx.obj["config"]
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))

"""Helpers shared by CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import typer

from reprise.application.config import AppConfig, resolve_config
from reprise.domain.exceptions import RepriseError
from reprise.domain.models import CardRecord, as_utc
from reprise.infrastructure.yaml_repository import YamlCollectionRepository


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    return resolve_config(overrides)


def open_repository(ctx: typer.Context) -> YamlCollectionRepository:
    config: AppConfig = ctx.obj["config"]
    return YamlCollectionRepository(config.deck_file)


def reference_time(ctx: typer.Context) -> datetime:
    """The --now override if given, else the current UTC instant."""
    raw = (ctx.obj or {}).get("now")
    if not raw:
        return as_utc()
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as e:
        raise typer.BadParameter(f"--now must be an ISO-8601 timestamp: {raw}") from e
    return as_utc(parsed)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn domain errors into a red message and exit code 1."""
    try:
        yield
    except RepriseError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e


def card_summary(card: CardRecord) -> dict[str, Any]:
    return {
        "id": card.id,
        "front": card.front,
        "ease_factor": card.ease_factor,
        "interval_days": card.interval_days,
        "next_review_at": card.next_review_at.isoformat(),
        "review_count": card.review_count,
        "last_reviewed_at": card.last_reviewed_at.isoformat() if card.last_reviewed_at else None,
    }

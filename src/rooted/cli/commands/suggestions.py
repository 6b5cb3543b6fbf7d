"""Suggestion commands: suggest, complete, show-history, delete-record."""

import json
import logging
from datetime import datetime, timezone
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import progression_params_from_config
from ...core.models import Source, SuggestionLog
from ...core.suggestion import plan_daily_suggestion, plan_to_log
from ...io.history_store import HistoryStore
from ...io.serializers import (
    ValidationError,
    suggestion_log_to_dict,
    validate_choice,
    validate_date,
    validate_mood,
)
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store

logger = logging.getLogger(__name__)


def get_or_create_todays_suggestion(
    store: HistoryStore,
    now: datetime,
    force_create: bool = False,
    source: Source = "api",
) -> tuple[SuggestionLog, bool]:
    """
    Return the suggestion for ``now``'s date, generating it if needed.

    An existing suggestion is returned unchanged unless ``force_create``
    is set, in which case it is replaced.

    Args:
        store: History store (must be initialised)
        now: Reference time in UTC; its date is the suggestion date
        force_create: Regenerate even if a suggestion exists
        source: Who asked for the suggestion

    Returns:
        (log, created) tuple

    Raises:
        FileNotFoundError: If the store is not initialised
        ValidationError: If stored data is invalid
        ValueError: If configured progression thresholds are invalid
    """
    today = now.strftime("%Y-%m-%d")

    existing = store.get_log_for_date(today)
    if existing is not None and not force_create:
        return existing, False

    profile = store.load_profile()
    plan = plan_daily_suggestion(
        profile,
        store.load_logs(),
        store.load_readings(),
        now,
        params=progression_params_from_config(),
    )
    log = plan_to_log(
        plan,
        date=today,
        created_at=now.isoformat(timespec="seconds"),
        focus_used=profile.focus if profile is not None else None,
        source=source,
    )
    store.upsert_log(log)
    logger.info(
        "Generated %s suggestion for %s (tier=%s, trend=%s, data=%s)",
        log.suggestion.category, today, log.progression, log.trend, log.data_used,
    )
    return log, True


def _resolve_now(date: str | None) -> datetime:
    """Current UTC time, moved onto ``date`` when one is given."""
    now = datetime.now(timezone.utc)
    if date is None:
        return now
    day = datetime.strptime(validate_date(date), "%Y-%m-%d")
    return datetime.combine(day.date(), now.timetz())


def _require_store(history_path) -> HistoryStore:
    store = get_store(history_path)
    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create profile and history.")
        raise typer.Exit(1)
    return store


@app.command("suggest")
def suggest(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Suggestion date (YYYY-MM-DD, default: today)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Regenerate even if today's suggestion exists"),
    ] = False,
    source: Annotated[
        str,
        typer.Option("--source", help="Request source: auto | manual | api"),
    ] = "manual",
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show today's suggestion, generating it on first request.
    """
    store = _require_store(history_path)

    try:
        validate_choice(source, ("auto", "manual", "api"), "source")
        now = _resolve_now(date)
        log, created = get_or_create_todays_suggestion(
            store, now, force_create=force, source=source  # type: ignore[arg-type]
        )
    except (FileNotFoundError, ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        out = suggestion_log_to_dict(log)
        out["is_new"] = created
        print(json.dumps(out, indent=2))
        return

    views.print_suggestion(log, is_new=created)


@app.command("complete")
def complete(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Suggestion date (YYYY-MM-DD, default: today)"),
    ] = None,
    mood: Annotated[
        Optional[str],
        typer.Option("--mood", "-m", help="How did it feel: sad | neutral | smile | grin"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Mark a day's suggestion as completed, optionally rating your mood.
    """
    store = _require_store(history_path)

    try:
        validate_mood(mood)
        day = validate_date(date) if date is not None else datetime.now(timezone.utc).strftime("%Y-%m-%d")
        log = store.get_log_for_date(day)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if log is None:
        views.print_error(f"No suggestion found for {day}")
        views.print_info("Run 'suggest' to get one.")
        raise typer.Exit(1)

    already = log.completed
    log = store.mark_completed(log.id, mood=mood)  # type: ignore[arg-type]

    if json_out:
        print(json.dumps({
            "suggestion_id": log.id,
            "date": log.date,
            "completed": True,
            "already_completed": already,
            "mood": log.mood,
        }, indent=2))
        return

    if already and mood is None:
        views.print_info(f"Suggestion for {day} already marked as completed")
    else:
        views.print_success(f"Marked suggestion for {day} as completed")
        if log.mood:
            views.print_info(f"Mood: {views.MOOD_EMOJI.get(log.mood, '')} {log.mood}")


@app.command("show-history")
def show_history(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of suggestions to show"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display suggestion history as a table.
    """
    if limit is not None and limit < 1:
        views.print_error("--limit must be at least 1")
        raise typer.Exit(1)

    store = _require_store(history_path)

    try:
        logs = store.load_logs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if limit is not None:
        logs = logs[-limit:]

    if json_out:
        print(json.dumps([suggestion_log_to_dict(log) for log in logs], indent=2))
        return

    views.print_history(logs)


@app.command("delete-record")
def delete_record(
    record_id: Annotated[
        int,
        typer.Argument(help="Suggestion ID to delete (see # column in show-history)"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Remove a suggestion by its ID.

    Use 'show-history' to see IDs in the # column.
    """
    store = get_store(history_path)

    try:
        logs = store.load_logs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not logs:
        views.print_error("No suggestions in history.")
        raise typer.Exit(1)

    if record_id < 1 or record_id > len(logs):
        views.print_error(f"Record ID must be between 1 and {len(logs)}")
        raise typer.Exit(1)

    target = logs[record_id - 1]
    views.console.print(
        f"Suggestion to delete: [bold]{target.date}[/bold] ({target.suggestion.category})"
    )

    if not force and not views.confirm_action("Delete this suggestion?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.delete_log_at(record_id - 1)

    views.print_success(f"Deleted suggestion #{record_id}: {target.date}")

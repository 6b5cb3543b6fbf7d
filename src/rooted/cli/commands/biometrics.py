"""Biometric commands: log-biometric, status."""

import json
from datetime import datetime, timezone
from typing import Annotated, Optional

import typer

from ...core.config import BIOMETRIC_METRICS
from ...core.engine.config_loader import progression_params_from_config
from ...core.metrics import completion_stats, history_points
from ...core.models import BiometricReading
from ...core.progression import compute_progression
from ...core.recovery import calculate_recovery_score, hrv_trend, summarize_biometrics
from ...io.serializers import ValidationError, validate_timestamp
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store


@app.command("log-biometric")
def log_biometric(
    metric: Annotated[
        str,
        typer.Option(
            "--metric", "-m",
            help="hrv_rmssd | heart_rate_resting | sleep_total | stress_avg",
        ),
    ],
    value: Annotated[
        float,
        typer.Option("--value", "-v", help="Value (sleep_total in seconds, stress 0-100)"),
    ],
    timestamp: Annotated[
        Optional[str],
        typer.Option("--timestamp", "-t", help="ISO datetime (default: now)"),
    ] = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Record one wearable reading.
    """
    store = get_store(history_path)

    if metric not in BIOMETRIC_METRICS:
        views.print_error(f"Metric must be one of: {', '.join(BIOMETRIC_METRICS)}")
        raise typer.Exit(1)

    if value < 0:
        views.print_error("Value must be non-negative")
        raise typer.Exit(1)

    try:
        ts = validate_timestamp(timestamp) if timestamp else datetime.now(timezone.utc).isoformat(timespec="seconds")
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.append_reading(BiometricReading(metric_type=metric, value=value, timestamp=ts))
    views.print_success(f"Logged {metric} = {value:g} at {ts}")


@app.command()
def status(
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show progression tier, completion stats and recovery.
    """
    store = get_store(history_path)

    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create profile and history.")
        raise typer.Exit(1)

    try:
        logs = store.load_logs()
        readings = store.load_readings()
        params = progression_params_from_config()
    except (FileNotFoundError, ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    now = datetime.now(timezone.utc)
    today = now.strftime("%Y-%m-%d")
    progression = compute_progression(history_points(logs, before=today), params)
    stats = completion_stats(logs)
    summary = summarize_biometrics(readings, now)
    score = calculate_recovery_score(summary)
    trend = hrv_trend(readings, now)

    if json_out:
        print(json.dumps({
            "progression": progression.progression,
            "adherence": round(progression.adherence, 3),
            "mood_avg": round(progression.mood_avg, 3),
            "total_suggestions": stats.total,
            "completed_suggestions": stats.completed,
            "completion_rate": stats.completion_rate,
            "current_streak": stats.current_streak,
            "recovery_score": score,
            "wearable_data_points": summary.data_points,
            "trend": trend,
        }, indent=2))
        return

    views.console.print(
        views.format_status_display(progression, stats, summary, score, trend)
    )

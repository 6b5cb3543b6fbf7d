"""Analysis commands: progress."""

import json
from typing import Annotated

import typer

from ...core.metrics import mood_counts, weekly_adherence
from ...io.serializers import ValidationError
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store


@app.command()
def progress(
    weeks: Annotated[
        int,
        typer.Option("--weeks", "-w", help="Number of weeks to chart"),
    ] = 4,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show weekly adherence and mood charts.
    """
    if weeks < 1:
        views.print_error("--weeks must be at least 1")
        raise typer.Exit(1)

    store = get_store(history_path)

    try:
        logs = store.load_logs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "weekly_adherence": [
                {"weeks_ago": weeks_ago, "ratio": ratio}
                for weeks_ago, ratio in weekly_adherence(logs, weeks)
            ],
            "moods": mood_counts(logs),
        }, indent=2))
        return

    views.print_adherence_chart(logs, weeks)
    views.console.print()
    views.print_mood_chart(mood_counts(logs))

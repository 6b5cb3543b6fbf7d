"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of suggestion data.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.ascii_plot import create_mood_chart, create_weekly_adherence_chart
from ..core.models import (
    BiometricSummary,
    CircadianSuggestion,
    CompletionStats,
    DerivedCircadian,
    ProgressionResult,
    SuggestionLog,
    Trend,
)

console = Console()

MOOD_EMOJI: dict[str, str] = {
    "sad": "😞",
    "neutral": "😐",
    "smile": "🙂",
    "grin": "😁",
}

TREND_ARROWS: dict[str, str] = {
    "up": "↑",
    "down": "↓",
    "stable": "→",
    "unknown": "?",
}


def print_suggestion(log: SuggestionLog, is_new: bool = False) -> None:
    """
    Print a daily suggestion as a panel.

    Args:
        log: Stored suggestion
        is_new: Whether it was generated just now
    """
    s = log.suggestion
    body = [f"[bold]{s.action}[/bold]", "", s.rationale]
    if s.evidence_note:
        body.extend(["", f"[dim]{s.evidence_note}[/dim]"])

    footer = [
        f"{s.category}",
        f"score {s.recovery_score}/100",
        f"trend {TREND_ARROWS.get(log.trend, '?')}",
        f"tier {log.progression}",
        f"data: {log.data_used}",
    ]
    if log.spec is not None:
        footer.insert(1, f"{log.spec.duration_min} min {log.spec.intensity}")
    body.extend(["", "[dim]" + " · ".join(footer) + "[/dim]"])

    status = "[green]done[/green]" if log.completed else "[yellow]to do[/yellow]"
    title = f"Suggestion for {log.date} ({status})"
    if is_new:
        title += " [cyan]new[/cyan]"

    console.print(Panel("\n".join(body), title=title, expand=False))


def format_history_table(logs: list[SuggestionLog]) -> Table:
    """
    Create a Rich table displaying suggestion history.

    Args:
        logs: List of suggestion logs to display

    Returns:
        Rich Table object
    """
    table = Table(title="Suggestion History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Theme", style="magenta")
    table.add_column("Min", justify="right")
    table.add_column("Tier")
    table.add_column("Trend", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Done", justify="center")
    table.add_column("Mood", justify="center")

    for i, log in enumerate(logs, 1):
        table.add_row(
            str(i),
            log.date,
            log.suggestion.category,
            str(log.spec.duration_min) if log.spec is not None else "-",
            log.progression,
            TREND_ARROWS.get(log.trend, "?"),
            str(log.suggestion.recovery_score),
            "[green]✓[/green]" if log.completed else "-",
            MOOD_EMOJI.get(log.mood, "-") if log.mood else "-",
        )

    return table


def print_history(logs: list[SuggestionLog]) -> None:
    """
    Print suggestion history to console.

    Args:
        logs: Logs to display
    """
    if not logs:
        console.print("[yellow]No suggestions recorded yet.[/yellow]")
        return

    console.print(format_history_table(logs))


def format_status_display(
    progression: ProgressionResult,
    stats: CompletionStats,
    summary: BiometricSummary,
    recovery_score: int,
    trend: Trend,
) -> str:
    """
    Format current status as text block.

    Returns:
        Formatted string
    """
    lines = ["Current status"]
    lines.append(f"- Tier: {progression.progression}")
    lines.append(f"- Adherence (recent): {progression.adherence:.0%}")
    lines.append(f"- Mood average: {progression.mood_avg:+.2f}")
    lines.append(
        f"- Completed: {stats.completed}/{stats.total} ({stats.completion_rate}%)"
        f"  streak {stats.current_streak}"
    )

    if summary.data_points > 0:
        lines.append(f"- Recovery score: {recovery_score}/100  ({summary.data_points} readings, {summary.time_range})")
        if summary.hrv_rmssd is not None:
            lines.append(f"  HRV: {summary.hrv_rmssd:.1f} ms (trend {trend})")
        if summary.heart_rate_resting is not None:
            lines.append(f"  Resting HR: {summary.heart_rate_resting:.0f} bpm")
        if summary.sleep_total is not None:
            lines.append(f"  Sleep: {summary.sleep_total / 3600:.1f} h")
        if summary.stress_avg is not None:
            lines.append(f"  Stress: {summary.stress_avg:.0f}/100")
    else:
        lines.append("- Recovery score: no recent wearable data")

    return "\n".join(lines)


def print_circadian(
    derived: DerivedCircadian,
    update: CircadianSuggestion | None = None,
) -> None:
    """Print a derived circadian profile and any suggested change."""
    table = Table(show_header=False, title="Circadian profile")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Chronotype", derived.chronotype)
    table.add_row("Wake", derived.wake_time)
    table.add_row("Bed", derived.bedtime)
    table.add_row("Caffeine cutoff", derived.caffeine_cutoff)
    table.add_row("Shift work", "yes" if derived.shift_work else "no")
    console.print(table)

    if update is not None:
        print_info(
            f"Your measured sleep suggests you may be more of a "
            f"{update.suggested_chronotype} ({update.reason.replace('_', ' ')})."
        )


def print_adherence_chart(logs: list[SuggestionLog], weeks: int = 4) -> None:
    """
    Print weekly adherence chart.

    Args:
        logs: Suggestion history
        weeks: Number of weeks to show
    """
    console.print(create_weekly_adherence_chart(logs, weeks))


def print_mood_chart(mood_counts: dict[str, int]) -> None:
    console.print(create_mood_chart(mood_counts))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")

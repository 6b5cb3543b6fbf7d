"""
ASCII charts for terminal display of adherence and mood.
"""

from .metrics import weekly_adherence
from .models import SuggestionLog


def create_simple_bar_chart(
    labels: list[str],
    values: list[float],
    width: int = 40,
    title: str = "",
    value_format: str = "{:.1f}",
) -> str:
    """
    Create a simple horizontal bar chart.

    Args:
        labels: Labels for each bar
        values: Values for each bar
        width: Maximum bar width
        title: Chart title
        value_format: Format string for the value printed after each bar

    Returns:
        ASCII bar chart string
    """
    if not values:
        return "No data to display."

    max_val = max(values)
    max_label_len = max(len(l) for l in labels) if labels else 0

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 5))

    for label, value in zip(labels, values):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        bar = "█" * bar_len
        lines.append(f"{label:>{max_label_len}} │{bar} {value_format.format(value)}")

    return "\n".join(lines)


def _week_label(weeks_ago: int) -> str:
    if weeks_ago == 0:
        return "This week"
    if weeks_ago == 1:
        return "Last week"
    return f"{weeks_ago} weeks ago"


def create_weekly_adherence_chart(
    logs: list[SuggestionLog],
    weeks: int = 4,
    today: str | None = None,
) -> str:
    """
    Chart of the share of suggestions completed per week.

    Weeks without suggestions are drawn as 0%.

    Args:
        logs: Suggestion history
        weeks: Number of weeks to show
        today: Anchor date for week 0 (default: latest log)

    Returns:
        ASCII chart string
    """
    if not logs:
        return "No suggestion history."

    labels: list[str] = []
    values: list[float] = []
    for weeks_ago, ratio in weekly_adherence(logs, weeks, today=today):
        labels.append(_week_label(weeks_ago))
        values.append(100.0 * (ratio or 0.0))

    return create_simple_bar_chart(
        labels,
        values,
        title="Weekly Adherence (% completed)",
        value_format="{:.0f}%",
    )


def create_mood_chart(mood_counts: dict[str, int]) -> str:
    """Bar chart of how often each mood was reported."""
    order = ["grin", "smile", "neutral", "sad"]
    labels = [m for m in order if m in mood_counts]
    if not labels:
        return "No moods recorded."
    values = [float(mood_counts[m]) for m in labels]
    return create_simple_bar_chart(labels, values, title="Mood Ratings", value_format="{:.0f}")

"""
Metrics over the suggestion log: history points, completion stats and
weekly adherence.
"""

from datetime import datetime

from .config import COMPLETION_STATS_LIMIT
from .models import CompletionStats, HistoryPoint, SuggestionLog


def history_points(
    logs: list[SuggestionLog],
    before: str | None = None,
) -> list[HistoryPoint]:
    """
    Convert stored logs to progression history, most recent first.

    Args:
        logs: Logs in ascending date order (as loaded from the store)
        before: If given, only logs dated strictly before this YYYY-MM-DD

    Returns:
        HistoryPoints ordered newest to oldest
    """
    if before is not None:
        logs = [log for log in logs if log.date < before]
    ordered = sorted(logs, key=lambda log: log.date, reverse=True)
    return [log.to_history_point() for log in ordered]


def completion_stats(
    logs: list[SuggestionLog],
    limit: int = COMPLETION_STATS_LIMIT,
) -> CompletionStats:
    """
    Summarize completion over the most recent ``limit`` suggestions.

    The streak counts consecutive completed suggestions starting from the
    most recent one.

    Args:
        logs: Suggestion logs, any order
        limit: How many recent logs to consider

    Returns:
        CompletionStats
    """
    recent = sorted(logs, key=lambda log: log.date, reverse=True)[:limit]

    total = len(recent)
    completed = sum(1 for log in recent if log.completed)
    rate = round(completed / total * 100) if total > 0 else 0

    streak = 0
    for log in recent:
        if not log.completed:
            break
        streak += 1

    return CompletionStats(
        total=total,
        completed=completed,
        completion_rate=rate,
        current_streak=streak,
    )


def weekly_adherence(
    logs: list[SuggestionLog],
    weeks: int = 4,
    today: str | None = None,
) -> list[tuple[int, float | None]]:
    """
    Completion ratio per week, oldest week first.

    Week 0 is the 7 days ending on ``today`` (default: the latest log date).
    Weeks without any suggestion have ratio None.

    Returns:
        List of (weeks_ago, ratio) tuples
    """
    if not logs:
        return [(i, None) for i in range(weeks - 1, -1, -1)]

    anchor_str = today or max(log.date for log in logs)
    anchor = datetime.strptime(anchor_str, "%Y-%m-%d")

    buckets: dict[int, list[bool]] = {}
    for log in logs:
        log_date = datetime.strptime(log.date, "%Y-%m-%d")
        days_ago = (anchor - log_date).days
        if days_ago < 0:
            continue
        weeks_ago = days_ago // 7
        if weeks_ago < weeks:
            buckets.setdefault(weeks_ago, []).append(log.completed)

    result: list[tuple[int, float | None]] = []
    for i in range(weeks - 1, -1, -1):
        flags = buckets.get(i)
        result.append((i, sum(flags) / len(flags) if flags else None))
    return result


def mood_counts(logs: list[SuggestionLog]) -> dict[str, int]:
    """Number of logs per mood rating (unrated logs are skipped)."""
    counts: dict[str, int] = {}
    for log in logs:
        if log.mood is not None:
            counts[log.mood] = counts.get(log.mood, 0) + 1
    return counts

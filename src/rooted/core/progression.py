"""
Progression classification from recent adherence and mood.

Maps the most recent suggestion outcomes to a tier (base, build, stretch)
that scales the next activity.
"""

from .config import MOOD_SCORES
from .models import HistoryPoint, Progression, ProgressionParams, ProgressionResult


def mood_score(mood: str) -> int:
    """
    Map a mood rating to its ordinal score.

    Args:
        mood: One of sad, neutral, smile, grin

    Returns:
        Score in [-1, 2]
    """
    return MOOD_SCORES[mood]


def adherence_ratio(sample: list[HistoryPoint]) -> float:
    """Fraction of entries marked completed; 0.0 for an empty sample."""
    if not sample:
        return 0.0
    completed = sum(1 for h in sample if h.completed)
    return completed / len(sample)


def mood_average(sample: list[HistoryPoint]) -> float:
    """Mean mood score over rated entries; 0.0 when nothing is rated."""
    scores = [mood_score(h.mood) for h in sample if h.mood is not None]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def classify_tier(
    adherence: float,
    mood_avg: float,
    params: ProgressionParams,
) -> Progression:
    """
    Pick the progression tier for given adherence and mood average.

    stretch: adherence >= stretch_adherence and mood >= stretch_mood
    build:   adherence >= build_adherence and mood >= build_mood
    base:    otherwise
    """
    if adherence >= params.stretch_adherence and mood_avg >= params.stretch_mood:
        return "stretch"
    if adherence >= params.build_adherence and mood_avg >= params.build_mood:
        return "build"
    return "base"


def compute_progression(
    history: list[HistoryPoint],
    params: ProgressionParams | None = None,
) -> ProgressionResult:
    """
    Classify a user into a progression tier.

    Only the first ``params.window_size`` entries are sampled, so
    ``history`` must be ordered most-recent first.

    Args:
        history: Past suggestions, most recent first
        params: Threshold overrides (defaults from config)

    Returns:
        ProgressionResult with tier, adherence and mood average
    """
    if params is None:
        params = ProgressionParams()

    sample = history[: params.window_size]
    if not sample:
        return ProgressionResult(progression="base", adherence=0.0, mood_avg=0.0)

    adherence = adherence_ratio(sample)
    mood_avg = mood_average(sample)

    return ProgressionResult(
        progression=classify_tier(adherence, mood_avg, params),
        adherence=adherence,
        mood_avg=mood_avg,
    )

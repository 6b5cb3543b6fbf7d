"""
Data models for rooted.

All core dataclasses representing suggestion history, biometrics,
activity specs and circadian settings.
"""

from dataclasses import dataclass, field
from typing import Literal

from .config import (
    BIOMETRIC_METRICS,
    BUILD_ADHERENCE,
    BUILD_MOOD,
    MOOD_SCORES,
    PROGRESSION_WINDOW_SIZE,
    STRETCH_ADHERENCE,
    STRETCH_MOOD,
)

Mood = Literal["sad", "neutral", "smile", "grin"]
Progression = Literal["base", "build", "stretch"]
Trend = Literal["up", "down", "stable", "unknown"]
Focus = Literal["movement", "breathwork", "mindset", "nutrition"]
Intensity = Literal["downregulate", "neutral", "light"]
DataUsed = Literal["wearable", "onboarding", "both", "none"]
Source = Literal["auto", "manual", "api"]
Chronotype = Literal["lark", "neutral", "owl"]
SelfId = Literal["morning", "neither", "evening"]

FOCUS_VALUES: tuple[str, ...] = ("movement", "breathwork", "mindset", "nutrition")
TREND_VALUES: tuple[str, ...] = ("up", "down", "stable", "unknown")
PROGRESSION_VALUES: tuple[str, ...] = ("base", "build", "stretch")
SOURCE_VALUES: tuple[str, ...] = ("auto", "manual", "api")
DATA_USED_VALUES: tuple[str, ...] = ("wearable", "onboarding", "both", "none")
SELF_ID_VALUES: tuple[str, ...] = ("morning", "neither", "evening")


@dataclass(frozen=True)
class HistoryPoint:
    """One past suggestion as seen by the progression model."""

    completed: bool
    mood: Mood | None = None

    def __post_init__(self) -> None:
        if self.mood is not None and self.mood not in MOOD_SCORES:
            raise ValueError(f"Invalid mood: {self.mood!r}")


@dataclass(frozen=True)
class ProgressionParams:
    """
    Tunable thresholds for progression classification.

    Stretch thresholds are expected to be at least as strict as build
    thresholds; the defaults satisfy that.
    """

    window_size: int = PROGRESSION_WINDOW_SIZE
    stretch_adherence: float = STRETCH_ADHERENCE
    stretch_mood: float = STRETCH_MOOD
    build_adherence: float = BUILD_ADHERENCE
    build_mood: float = BUILD_MOOD

    def __post_init__(self) -> None:
        if self.window_size <= 0:
            raise ValueError("window_size must be positive")


@dataclass(frozen=True)
class ProgressionResult:
    """Progression tier plus the two inputs it was derived from."""

    progression: Progression
    adherence: float
    mood_avg: float


@dataclass
class SuggestionSpec:
    """
    Concrete activity specification handed to suggestion composition.
    """

    theme: Focus
    trend: Trend
    duration_min: int  # 5-20
    intensity: Intensity
    constraints: list[str] = field(default_factory=list)


@dataclass
class BiometricReading:
    """A single wearable metric sample."""

    metric_type: str
    value: float
    timestamp: str  # ISO-8601 datetime

    def __post_init__(self) -> None:
        if self.metric_type not in BIOMETRIC_METRICS:
            raise ValueError(
                f"Invalid metric_type: {self.metric_type}. "
                f"Must be one of {BIOMETRIC_METRICS}"
            )


@dataclass
class BiometricSummary:
    """
    Recent biometrics condensed for recovery scoring.

    Metrics absent from the window are None.
    """

    data_points: int = 0
    time_range: str = "48h"
    hrv_rmssd: float | None = None
    heart_rate_resting: float | None = None
    sleep_total: float | None = None  # seconds
    stress_avg: float | None = None


@dataclass
class Suggestion:
    """The user-facing daily wellness suggestion."""

    action: str
    category: Focus
    rationale: str
    recovery_score: int
    wearable_used: bool
    evidence_note: str | None = None


@dataclass
class SuggestionLog:
    """
    A stored daily suggestion together with its outcome.

    One log exists per suggestion date.
    """

    id: str
    date: str  # ISO format: YYYY-MM-DD
    suggestion: Suggestion
    spec: SuggestionSpec | None = None
    completed: bool = False
    mood: Mood | None = None
    data_used: DataUsed = "none"
    trend: Trend = "unknown"
    focus_used: str | None = None
    progression: Progression = "base"
    source: Source = "api"
    created_at: str = ""

    def __post_init__(self) -> None:
        """Validate log data."""
        _validate_date(self.date)

        if self.mood is not None and self.mood not in MOOD_SCORES:
            raise ValueError(f"Invalid mood: {self.mood!r}")

        if self.source not in SOURCE_VALUES:
            raise ValueError(f"Invalid source: {self.source}")

    def to_history_point(self) -> HistoryPoint:
        return HistoryPoint(completed=self.completed, mood=self.mood)


@dataclass
class Screener:
    """Onboarding circadian screener answers."""

    self_id: SelfId
    wake_time: str  # HH:MM
    bedtime: str  # HH:MM
    shift_work: bool = False

    def __post_init__(self) -> None:
        if self.self_id not in SELF_ID_VALUES:
            raise ValueError(f"Invalid self_id: {self.self_id}")


@dataclass
class DerivedCircadian:
    """Circadian profile derived from a screener."""

    chronotype: Chronotype
    wake_time: str
    bedtime: str
    caffeine_cutoff: str
    shift_work: bool = False


@dataclass
class WearableSleepSummary:
    """Averaged sleep timing measured by a wearable."""

    stable: bool
    avg_sleep_onset_local: str | None = None  # HH:MM
    avg_wake_local: str | None = None
    midpoint_local: str | None = None


@dataclass
class CircadianSuggestion:
    """Proposed chronotype change backed by measured sleep timing."""

    reason: Literal["midpoint_shift"]
    suggested_chronotype: Chronotype
    suggested_wake: str | None = None
    suggested_bed: str | None = None


@dataclass
class UserProfile:
    """
    Onboarding answers that inform suggestions.

    ``focus`` is None until the user picks a theme; ``onboarding_complete``
    marks that onboarding answers exist at all.
    """

    focus: Focus | None = None
    onboarding_complete: bool = False
    screener: Screener | None = None
    circadian: DerivedCircadian | None = None

    def __post_init__(self) -> None:
        if self.focus is not None and self.focus not in FOCUS_VALUES:
            raise ValueError(
                f"Invalid focus: {self.focus!r}. Must be one of {FOCUS_VALUES}"
            )


@dataclass
class CompletionStats:
    """Completion summary over the most recent suggestions."""

    total: int
    completed: int
    completion_rate: int  # rounded percent
    current_streak: int


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    import re
    from datetime import datetime

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e

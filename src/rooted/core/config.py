"""
Configuration constants for the daily suggestion model.

All adjustable parameters are centralized here for easy tuning.
Progression thresholds can also be overridden from YAML, see
core/engine/config_loader.py.
"""

from typing import Final

# =============================================================================
# MOOD SCALE
# =============================================================================

MOOD_SCORES: Final[dict[str, int]] = {
    "sad": -1,
    "neutral": 0,
    "smile": 1,
    "grin": 2,
}

# =============================================================================
# PROGRESSION TIERS
# =============================================================================

PROGRESSION_WINDOW_SIZE: Final[int] = 10  # Most recent suggestions sampled
STRETCH_ADHERENCE: Final[float] = 0.8
STRETCH_MOOD: Final[float] = 0.5
BUILD_ADHERENCE: Final[float] = 0.6
BUILD_MOOD: Final[float] = 0.0

# =============================================================================
# ACTIVITY SPEC
# =============================================================================

DEFAULT_FOCUS: Final[str] = "breathwork"
BASE_DURATION_MIN: Final[int] = 10
MIN_DURATION_MIN: Final[int] = 5
MAX_DURATION_MIN: Final[int] = 20

DURATION_BUMP_MIN: Final[dict[str, int]] = {
    "base": 0,
    "build": 3,
    "stretch": 5,
}

SPEC_CONSTRAINTS: Final[tuple[str, ...]] = ("no equipment", "indoors ok")

# =============================================================================
# BIOMETRICS
# =============================================================================

BIOMETRIC_METRICS: Final[tuple[str, ...]] = (
    "hrv_rmssd",
    "heart_rate_resting",
    "sleep_total",  # seconds
    "stress_avg",  # 0-100
)

BIOMETRIC_WINDOW_HOURS: Final[int] = 48
HRV_TREND_DAYS: Final[int] = 7
HRV_TREND_CHANGE_PCT: Final[float] = 10.0  # +/- percent to call a direction

# =============================================================================
# RECOVERY SCORE
# =============================================================================

RECOVERY_BASELINE: Final[int] = 50  # Also the score when no data is available
RECOVERY_MIN: Final[int] = 0
RECOVERY_MAX: Final[int] = 100

# (lower bound exclusive, points), checked top-down; fallback is the last entry
HRV_BANDS: Final[list[tuple[float, int]]] = [(50, 15), (30, 8), (20, 3)]
HRV_LOW_PENALTY: Final[int] = -10

# (upper bound exclusive, points)
RESTING_HR_BANDS: Final[list[tuple[float, int]]] = [(60, 12), (70, 6), (80, 2)]
RESTING_HR_HIGH_PENALTY: Final[int] = -8

# (low hours, high hours, points), inclusive
SLEEP_HOUR_BANDS: Final[list[tuple[float, float, int]]] = [
    (7, 9, 15),
    (6, 10, 8),
    (5, 11, 3),
]
SLEEP_OUT_OF_RANGE_PENALTY: Final[int] = -10

STRESS_BANDS: Final[list[tuple[float, int]]] = [(20, 8), (40, 4), (60, 1)]
STRESS_HIGH_PENALTY: Final[int] = -5

# =============================================================================
# COMPLETION STATS
# =============================================================================

COMPLETION_STATS_LIMIT: Final[int] = 30  # Most recent suggestions counted

# =============================================================================
# CIRCADIAN
# =============================================================================

MINUTES_PER_DAY: Final[int] = 24 * 60
CAFFEINE_CUTOFF_HOURS_BEFORE_BED: Final[int] = 8

# Sleep midpoint bands for chronotype lean (minutes after midnight)
LARK_MIDPOINT_START: Final[int] = 1 * 60
LARK_MIDPOINT_END: Final[int] = 3 * 60
OWL_MIDPOINT_START: Final[int] = 6 * 60


def clamp_duration(minutes: int) -> int:
    """Clamp an activity duration into [MIN_DURATION_MIN, MAX_DURATION_MIN]."""
    return min(MAX_DURATION_MIN, max(MIN_DURATION_MIN, minutes))

"""
Circadian settings: chronotype, caffeine cutoff and wearable-backed
chronotype suggestions.

Times are local wall-clock strings in HH:MM (24 h).
"""

import re

from .config import (
    CAFFEINE_CUTOFF_HOURS_BEFORE_BED,
    LARK_MIDPOINT_END,
    LARK_MIDPOINT_START,
    MINUTES_PER_DAY,
    OWL_MIDPOINT_START,
)
from .models import (
    Chronotype,
    CircadianSuggestion,
    DerivedCircadian,
    Screener,
    WearableSleepSummary,
)

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_hhmm(hhmm: str) -> int:
    """
    Parse HH:MM into minutes after midnight.

    Raises:
        ValueError: If the string is not a valid 24 h time
    """
    m = _HHMM_RE.match(hhmm)
    if not m:
        raise ValueError(f"Invalid time: {hhmm}")
    return int(m.group(1)) * 60 + int(m.group(2))


def to_hhmm(total_minutes: int) -> str:
    """Format minutes as HH:MM, wrapping into a single day."""
    m = total_minutes % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def sleep_midpoint(wake_min: int, bed_min: int) -> int:
    """
    Midpoint between wake time and bedtime, in minutes after midnight.

    A bedtime earlier than the wake time is treated as the next day.
    """
    if bed_min < wake_min:
        bed_min += MINUTES_PER_DAY
    span = bed_min - wake_min
    return (wake_min + span // 2) % MINUTES_PER_DAY


def chronotype_bias(midpoint_min: int) -> Chronotype:
    """
    Lean implied by a midpoint.

    [01:00, 03:00] -> lark, >= 06:00 -> owl, anything else -> neutral.
    """
    if LARK_MIDPOINT_START <= midpoint_min <= LARK_MIDPOINT_END:
        return "lark"
    if midpoint_min >= OWL_MIDPOINT_START:
        return "owl"
    return "neutral"


def derive_chronotype(screener: Screener) -> Chronotype:
    """
    Chronotype from screener answers.

    Morning and evening self-identification are taken as-is; "neither"
    leans by the wake/bed midpoint.
    """
    if screener.self_id == "morning":
        return "lark"
    if screener.self_id == "evening":
        return "owl"

    wake = parse_hhmm(screener.wake_time)
    bed = parse_hhmm(screener.bedtime)
    return chronotype_bias(sleep_midpoint(wake, bed))


def compute_caffeine_cutoff(bedtime: str) -> str:
    """Latest caffeine time: eight hours before bedtime."""
    return to_hhmm(parse_hhmm(bedtime) - CAFFEINE_CUTOFF_HOURS_BEFORE_BED * 60)


def build_derived_circadian(screener: Screener) -> DerivedCircadian:
    """
    Derive chronotype and caffeine cutoff from screener answers.

    Raises:
        ValueError: If wake time or bedtime is not HH:MM
    """
    parse_hhmm(screener.wake_time)
    return DerivedCircadian(
        chronotype=derive_chronotype(screener),
        wake_time=screener.wake_time,
        bedtime=screener.bedtime,
        caffeine_cutoff=compute_caffeine_cutoff(screener.bedtime),
        shift_work=bool(screener.shift_work),
    )


def _try_parse_hhmm(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return parse_hhmm(value)
    except ValueError:
        return None


def suggest_chronotype_update(
    current: DerivedCircadian,
    wearable: WearableSleepSummary | None,
) -> CircadianSuggestion | None:
    """
    Propose a chronotype change when measured sleep disagrees.

    Only stable wearable summaries are considered, and only a neutral
    chronotype is ever moved (towards lark or owl).

    Args:
        current: Current derived circadian profile
        wearable: Measured sleep timing, if any

    Returns:
        CircadianSuggestion or None
    """
    if wearable is None or not wearable.stable:
        return None

    mid = _try_parse_hhmm(wearable.midpoint_local)
    if mid is None:
        wake = _try_parse_hhmm(wearable.avg_wake_local)
        onset = _try_parse_hhmm(wearable.avg_sleep_onset_local)
        if wake is None or onset is None:
            return None
        mid = sleep_midpoint(wake, onset)

    bias = chronotype_bias(mid)
    if current.chronotype == "neutral" and bias in ("lark", "owl"):
        return CircadianSuggestion(reason="midpoint_shift", suggested_chronotype=bias)
    return None

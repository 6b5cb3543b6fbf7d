"""
Recovery scoring and HRV trend from wearable biometrics.

Condenses recent readings into a BiometricSummary, scores it on a 0-100
scale, and classifies the short-term HRV direction.
"""

from datetime import datetime, timedelta, timezone

from .config import (
    BIOMETRIC_WINDOW_HOURS,
    HRV_BANDS,
    HRV_LOW_PENALTY,
    HRV_TREND_CHANGE_PCT,
    HRV_TREND_DAYS,
    RECOVERY_BASELINE,
    RECOVERY_MAX,
    RECOVERY_MIN,
    RESTING_HR_BANDS,
    RESTING_HR_HIGH_PENALTY,
    SLEEP_HOUR_BANDS,
    SLEEP_OUT_OF_RANGE_PENALTY,
    STRESS_BANDS,
    STRESS_HIGH_PENALTY,
)
from .models import BiometricReading, BiometricSummary, Trend


def parse_timestamp(value: str | datetime) -> datetime:
    """
    Parse an ISO-8601 timestamp into a naive UTC datetime.

    Aware values are converted to UTC; naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def readings_since(
    readings: list[BiometricReading],
    cutoff: datetime,
    metric_type: str | None = None,
) -> list[BiometricReading]:
    """Readings at or after cutoff, optionally restricted to one metric."""
    return [
        r
        for r in readings
        if parse_timestamp(r.timestamp) >= cutoff
        and (metric_type is None or r.metric_type == metric_type)
    ]


def summarize_biometrics(
    readings: list[BiometricReading],
    now: datetime,
    window_hours: int = BIOMETRIC_WINDOW_HOURS,
) -> BiometricSummary:
    """
    Condense readings from the last ``window_hours`` into a summary.

    Sleep takes the most recent value; the other metrics are averaged
    over the window.

    Args:
        readings: All known readings, any order
        now: Reference time
        window_hours: Look-back window

    Returns:
        BiometricSummary (data_points=0 if nothing is in the window)
    """
    now = parse_timestamp(now)
    cutoff = now - timedelta(hours=window_hours)
    recent = readings_since(readings, cutoff)
    summary = BiometricSummary(data_points=len(recent), time_range=f"{window_hours}h")

    if not recent:
        return summary

    # Newest first so that index 0 is the latest sample per metric
    recent.sort(key=lambda r: parse_timestamp(r.timestamp), reverse=True)

    by_metric: dict[str, list[float]] = {}
    for r in recent:
        by_metric.setdefault(r.metric_type, []).append(float(r.value))

    for metric_type, values in by_metric.items():
        if metric_type == "sleep_total":
            summary.sleep_total = values[0]
        else:
            setattr(summary, metric_type, sum(values) / len(values))

    return summary


def _hrv_points(hrv: float) -> int:
    for threshold, points in HRV_BANDS:
        if hrv > threshold:
            return points
    return HRV_LOW_PENALTY


def _resting_hr_points(bpm: float) -> int:
    for threshold, points in RESTING_HR_BANDS:
        if bpm < threshold:
            return points
    return RESTING_HR_HIGH_PENALTY


def _sleep_points(sleep_seconds: float) -> int:
    hours = sleep_seconds / 3600
    for low, high, points in SLEEP_HOUR_BANDS:
        if low <= hours <= high:
            return points
    return SLEEP_OUT_OF_RANGE_PENALTY


def _stress_points(stress: float) -> int:
    for threshold, points in STRESS_BANDS:
        if stress < threshold:
            return points
    return STRESS_HIGH_PENALTY


def calculate_recovery_score(summary: BiometricSummary) -> int:
    """
    Score recovery on a 0-100 scale.

    Starts at 50 and adds banded contributions for HRV, resting heart
    rate, sleep duration and stress; missing metrics contribute nothing.

    Args:
        summary: Condensed biometrics

    Returns:
        Integer score clamped to [0, 100]; 50 when there is no data
    """
    if summary.data_points == 0:
        return RECOVERY_BASELINE

    score = RECOVERY_BASELINE

    if summary.hrv_rmssd is not None:
        score += _hrv_points(summary.hrv_rmssd)
    if summary.heart_rate_resting is not None:
        score += _resting_hr_points(summary.heart_rate_resting)
    if summary.sleep_total is not None:
        score += _sleep_points(summary.sleep_total)
    if summary.stress_avg is not None:
        score += _stress_points(summary.stress_avg)

    return max(RECOVERY_MIN, min(RECOVERY_MAX, round(score)))


def hrv_trend(
    readings: list[BiometricReading],
    now: datetime,
    days: int = HRV_TREND_DAYS,
) -> Trend:
    """
    Classify the HRV direction over the last ``days`` days.

    Takes up to ``days`` HRV readings (oldest first), compares the mean of
    the second half against the first half:

        change = (second - first) / first * 100

    change > +10% -> up, change < -10% -> down, otherwise stable.

    Args:
        readings: All known readings, any order
        now: Reference time
        days: Look-back window in days

    Returns:
        Trend; "unknown" with fewer than two readings
    """
    now = parse_timestamp(now)
    cutoff = now - timedelta(days=days)
    hrv = readings_since(readings, cutoff, metric_type="hrv_rmssd")
    hrv.sort(key=lambda r: parse_timestamp(r.timestamp))
    values = [float(r.value) for r in hrv[:days]]

    if len(values) < 2:
        return "unknown"

    mid = len(values) // 2
    first_half = values[:mid]
    second_half = values[mid:]

    first_avg = sum(first_half) / len(first_half)
    second_avg = sum(second_half) / len(second_half)

    if first_avg == 0:
        return "unknown"

    change_pct = (second_avg - first_avg) / first_avg * 100

    if change_pct > HRV_TREND_CHANGE_PCT:
        return "up"
    if change_pct < -HRV_TREND_CHANGE_PCT:
        return "down"
    return "stable"

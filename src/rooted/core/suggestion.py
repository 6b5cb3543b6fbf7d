"""
Daily suggestion composition.

Turns an activity spec plus recovery context into one concrete, short
wellness action. Text comes from a fixed catalog keyed by theme and
intensity, so the same inputs always produce the same suggestion.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from .metrics import history_points
from .models import (
    BiometricReading,
    BiometricSummary,
    DataUsed,
    ProgressionParams,
    ProgressionResult,
    Source,
    Suggestion,
    SuggestionLog,
    SuggestionSpec,
    Trend,
    UserProfile,
)
from .progression import compute_progression
from .recovery import calculate_recovery_score, hrv_trend, parse_timestamp, summarize_biometrics
from .spec import build_spec, decide_data_used

# {theme: {intensity: action template}}; templates take {minutes}
ACTIVITY_CATALOG: dict[str, dict[str, str]] = {
    "breathwork": {
        "downregulate": (
            "Spend {minutes} minutes on slow exhale breathing: inhale for 4 counts, "
            "exhale for 6 to 8 counts, seated or lying down."
        ),
        "neutral": (
            "Do {minutes} minutes of box breathing: inhale 4, hold 4, exhale 4, hold 4."
        ),
        "light": (
            "Take {minutes} minutes of energising breath: 3 rounds of 30 relaxed "
            "breaths, each followed by a gentle breath hold."
        ),
    },
    "movement": {
        "downregulate": (
            "Do {minutes} minutes of gentle mobility: neck rolls, cat-cow and a slow "
            "forward fold, moving only as far as feels easy."
        ),
        "neutral": (
            "Take a {minutes}-minute easy walk or march in place, keeping a pace "
            "where you can talk comfortably."
        ),
        "light": (
            "Do a {minutes}-minute light bodyweight circuit: squats, wall push-ups "
            "and standing knee lifts, 40 seconds on, 20 seconds easy."
        ),
    },
    "mindset": {
        "downregulate": (
            "Spend {minutes} minutes on a body scan, noticing each area from feet "
            "to head without trying to change anything."
        ),
        "neutral": (
            "Take {minutes} minutes to write down three things that went well "
            "recently and why they happened."
        ),
        "light": (
            "Spend {minutes} minutes planning one small challenge for today and "
            "visualising yourself completing it."
        ),
    },
    "nutrition": {
        "downregulate": (
            "Take {minutes} minutes to prepare a warm, simple snack and eat it "
            "slowly without screens."
        ),
        "neutral": (
            "Spend {minutes} minutes preparing a glass of water and a portion of "
            "fruit or vegetables for later today."
        ),
        "light": (
            "Use {minutes} minutes to prep a protein-rich snack to have within an "
            "hour of moving today."
        ),
    },
}

EVIDENCE_NOTES: dict[str, str] = {
    "breathwork": "Slow, paced breathing is associated with higher vagal tone.",
    "movement": "Short bouts of light activity support recovery and mood.",
    "mindset": "Brief reflective practices can lower perceived stress.",
    "nutrition": "Regular hydration and whole foods support energy and recovery.",
}

TREND_PHRASES: dict[str, str] = {
    "up": "Your HRV has been trending up",
    "down": "Your HRV has been trending down, so today favours calming your system",
    "stable": "Your HRV has been steady",
    "unknown": "There isn't enough HRV data for a trend yet",
}

PROGRESSION_PHRASES: dict[str, str] = {
    "base": "keeping things simple to build the habit",
    "build": "adding a little more time as you've been consistent",
    "stretch": "stretching a bit further since you've been consistent and feeling good",
}


@dataclass
class DailyPlan:
    """Everything decided for one day's suggestion."""

    suggestion: Suggestion
    spec: SuggestionSpec
    progression: ProgressionResult
    data_used: DataUsed
    trend: Trend
    summary: BiometricSummary


def fallback_suggestion() -> Suggestion:
    """Suggestion used when neither wearable nor onboarding data exist."""
    return Suggestion(
        action=(
            "Take 5 minutes for 4-7-8 breathing: Inhale for 4 counts, hold for 7, "
            "exhale for 8. Repeat 4 cycles."
        ),
        category="breathwork",
        rationale=(
            "Without biometric data to guide us today, let's focus on proven "
            "stress-reduction techniques. The 4-7-8 breathing pattern activates your "
            "parasympathetic nervous system, helping to naturally calm your mind and body."
        ),
        recovery_score=50,
        wearable_used=False,
    )


def compose_action(spec: SuggestionSpec) -> str:
    """Action text for a spec, with constraints appended."""
    template = ACTIVITY_CATALOG[spec.theme][spec.intensity]
    action = template.format(minutes=spec.duration_min)
    if spec.constraints:
        action += f" ({', '.join(spec.constraints)})"
    return action


def compose_rationale(
    spec: SuggestionSpec,
    recovery_score: int,
    wearable_used: bool,
    progression: ProgressionResult,
) -> str:
    """Short explanation tying the suggestion to the user's data."""
    parts: list[str] = []
    if wearable_used:
        parts.append(f"Your recovery score is {recovery_score}/100.")
    parts.append(f"{TREND_PHRASES[spec.trend]}; we're {PROGRESSION_PHRASES[progression.progression]}.")
    parts.append(
        f"Recent completion {progression.adherence:.0%}, mood average {progression.mood_avg:+.1f}."
    )
    return " ".join(parts)


def compose_suggestion(
    spec: SuggestionSpec,
    recovery_score: int,
    wearable_used: bool,
    progression: ProgressionResult,
) -> Suggestion:
    """Build the user-facing suggestion from a spec."""
    return Suggestion(
        action=compose_action(spec),
        category=spec.theme,
        rationale=compose_rationale(spec, recovery_score, wearable_used, progression),
        recovery_score=recovery_score,
        wearable_used=wearable_used,
        evidence_note=EVIDENCE_NOTES.get(spec.theme),
    )


def plan_daily_suggestion(
    profile: UserProfile | None,
    logs: list[SuggestionLog],
    readings: list[BiometricReading],
    now: datetime,
    params: ProgressionParams | None = None,
) -> DailyPlan:
    """
    Decide today's suggestion.

    Logs dated today or later are ignored so that regenerating a day does
    not feed on its own outcome.

    Args:
        profile: Onboarding answers (None if not onboarded)
        logs: Stored suggestion logs
        readings: Stored biometric readings
        now: Reference time
        params: Progression threshold overrides

    Returns:
        DailyPlan
    """
    now = parse_timestamp(now)
    today = now.strftime("%Y-%m-%d")

    summary = summarize_biometrics(readings, now)
    has_wearable = summary.data_points > 0
    has_onboarding = profile is not None and (
        profile.onboarding_complete or profile.focus is not None
    )
    data_used = decide_data_used(has_wearable, has_onboarding)

    trend = hrv_trend(readings, now)
    progression = compute_progression(history_points(logs, before=today), params)

    focus = profile.focus if profile is not None else None
    spec = build_spec(focus, trend, progression.progression)

    if data_used == "none":
        suggestion = fallback_suggestion()
    else:
        suggestion = compose_suggestion(
            spec,
            calculate_recovery_score(summary),
            has_wearable,
            progression,
        )

    return DailyPlan(
        suggestion=suggestion,
        spec=spec,
        progression=progression,
        data_used=data_used,
        trend=trend,
        summary=summary,
    )


def plan_to_log(
    plan: DailyPlan,
    date: str,
    created_at: str,
    focus_used: str | None = None,
    source: Source = "api",
) -> SuggestionLog:
    """Wrap a DailyPlan into a new, not yet completed, SuggestionLog."""
    return SuggestionLog(
        id=uuid.uuid4().hex,
        date=date,
        suggestion=plan.suggestion,
        spec=plan.spec,
        completed=False,
        mood=None,
        data_used=plan.data_used,
        trend=plan.trend,
        focus_used=focus_used,
        progression=plan.progression.progression,
        source=source,
        created_at=created_at,
    )

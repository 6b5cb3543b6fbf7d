"""
Integration tests for the daily suggestion pipeline.

Each test exercises the full path: profile + logs + readings →
plan_daily_suggestion → plan_to_log. Hand-computed expected values are
included in comments.

Reference time for every scenario: 2026-03-10 12:00.
"""

from datetime import datetime, timedelta

import pytest

from rooted.core.models import (
    BiometricReading,
    ProgressionParams,
    SuggestionLog,
    UserProfile,
)
from rooted.core.suggestion import (
    ACTIVITY_CATALOG,
    fallback_suggestion,
    plan_daily_suggestion,
    plan_to_log,
)


NOW = datetime(2026, 3, 10, 12, 0)


# ===========================================================================
# Helpers
# ===========================================================================

def _log(date: str, completed: bool = True, mood: str | None = "grin") -> SuggestionLog:
    """Build a stored suggestion log with a placeholder suggestion."""
    return SuggestionLog(
        id=f"log-{date}",
        date=date,
        suggestion=fallback_suggestion(),
        completed=completed,
        mood=mood,  # type: ignore[arg-type]
    )


def _past_logs(n: int, completed: bool = True, mood: str | None = "grin") -> list[SuggestionLog]:
    """n consecutive daily logs ending the day before NOW."""
    return [
        _log((NOW - timedelta(days=i)).strftime("%Y-%m-%d"), completed, mood)
        for i in range(n, 0, -1)
    ]


def _hrv(values_by_day: dict[int, float]) -> list[BiometricReading]:
    """HRV readings at 08:00 on the given March days."""
    return [
        BiometricReading(metric_type="hrv_rmssd", value=v, timestamp=f"2026-03-{d:02d}T08:00:00")
        for d, v in values_by_day.items()
    ]


RISING_HRV = {5: 50, 6: 50, 9: 60, 10: 60}   # +20 % → up; last 48 h avg 60
FALLING_HRV = {5: 60, 6: 60, 9: 50, 10: 50}  # -16.7 % → down


# ===========================================================================
# Fallback
# ===========================================================================

class TestFallback:
    """No wearable and no onboarding → fixed breathwork suggestion."""

    def test_no_profile_no_readings(self):
        plan = plan_daily_suggestion(None, [], [], NOW)
        assert plan.data_used == "none"
        assert plan.suggestion == fallback_suggestion()
        assert plan.suggestion.category == "breathwork"
        assert plan.suggestion.recovery_score == 50
        assert plan.suggestion.wearable_used is False
        assert plan.trend == "unknown"

    def test_empty_profile_counts_as_no_onboarding(self):
        plan = plan_daily_suggestion(UserProfile(), [], [], NOW)
        assert plan.data_used == "none"

    def test_fallback_still_records_spec_and_tier(self):
        plan = plan_daily_suggestion(None, _past_logs(10), [], NOW)
        assert plan.progression.progression == "stretch"
        assert plan.spec.theme == "breathwork"
        assert plan.spec.duration_min == 15


# ===========================================================================
# Full pipeline
# ===========================================================================

class TestDailyPlan:

    def test_consistent_mover_with_rising_hrv(self):
        """
        focus=movement, 10 completed grins, HRV rising.

        tier: adherence 1.0, mood 2.0 → stretch → 10 + 5 = 15 min
        intensity: up + movement → light
        recovery: HRV avg 60 (> 50) → 50 + 15 = 65
        """
        profile = UserProfile(focus="movement", onboarding_complete=True)
        plan = plan_daily_suggestion(profile, _past_logs(10), _hrv(RISING_HRV), NOW)

        assert plan.data_used == "both"
        assert plan.trend == "up"
        assert plan.progression.progression == "stretch"
        assert plan.spec.duration_min == 15
        assert plan.spec.intensity == "light"

        s = plan.suggestion
        assert s.category == "movement"
        assert s.recovery_score == 65
        assert s.wearable_used is True
        assert "15-minute light bodyweight circuit" in s.action
        assert s.action.endswith("(no equipment, indoors ok)")
        assert "65/100" in s.rationale
        assert s.evidence_note

    def test_wearable_only_defaults_to_breathwork(self):
        # single HRV reading → trend unknown → neutral; no history → base → 10 min
        plan = plan_daily_suggestion(None, [], _hrv({10: 40}), NOW)
        assert plan.data_used == "wearable"
        assert plan.trend == "unknown"
        assert plan.spec.theme == "breathwork"
        assert plan.spec.intensity == "neutral"
        assert plan.spec.duration_min == 10
        assert plan.suggestion.action.startswith(
            ACTIVITY_CATALOG["breathwork"]["neutral"].format(minutes=10)
        )
        # HRV 40 → +8
        assert plan.suggestion.recovery_score == 58

    def test_onboarding_only(self):
        profile = UserProfile(focus="mindset", onboarding_complete=True)
        plan = plan_daily_suggestion(profile, [], [], NOW)
        assert plan.data_used == "onboarding"
        assert plan.suggestion.category == "mindset"
        assert plan.suggestion.wearable_used is False
        assert plan.suggestion.recovery_score == 50

    def test_falling_hrv_downregulates(self):
        profile = UserProfile(focus="nutrition", onboarding_complete=True)
        plan = plan_daily_suggestion(profile, _past_logs(10), _hrv(FALLING_HRV), NOW)
        assert plan.trend == "down"
        assert plan.spec.intensity == "downregulate"
        assert plan.suggestion.category == "nutrition"

    def test_mixed_history_builds(self):
        # 7/10 completed, all neutral → adherence 0.7, mood 0.0 → build → 13 min
        logs = _past_logs(10, mood="neutral")
        for log in logs[:3]:
            log.completed = False
            log.mood = None
        profile = UserProfile(focus="breathwork")
        plan = plan_daily_suggestion(profile, logs, [], NOW)
        assert plan.progression.adherence == pytest.approx(0.7)
        assert plan.progression.progression == "build"
        assert plan.spec.duration_min == 13
        assert "13 minutes" in plan.suggestion.action

    def test_todays_log_is_ignored(self):
        # today's uncompleted log must not drag adherence down
        logs = _past_logs(10) + [_log("2026-03-10", completed=False, mood=None)]
        profile = UserProfile(focus="movement")
        plan = plan_daily_suggestion(profile, logs, [], NOW)
        assert plan.progression.adherence == 1.0
        assert plan.progression.progression == "stretch"

    def test_future_logs_are_ignored(self):
        logs = [_log("2026-03-11", completed=False, mood="sad")]
        plan = plan_daily_suggestion(UserProfile(focus="movement"), logs, [], NOW)
        assert plan.progression.progression == "base"
        assert plan.progression.adherence == 0.0

    def test_custom_params_are_used(self):
        params = ProgressionParams(window_size=3, stretch_adherence=1.0, stretch_mood=2.0)
        logs = _past_logs(10, completed=False, mood=None)
        logs[-3:] = _past_logs(3)
        plan = plan_daily_suggestion(UserProfile(focus="mindset"), logs, [], NOW, params)
        assert plan.progression.progression == "stretch"

    def test_same_inputs_same_suggestion(self):
        profile = UserProfile(focus="movement", onboarding_complete=True)
        a = plan_daily_suggestion(profile, _past_logs(5), _hrv(RISING_HRV), NOW)
        b = plan_daily_suggestion(profile, _past_logs(5), _hrv(RISING_HRV), NOW)
        assert a.suggestion == b.suggestion
        assert a.spec == b.spec


# ===========================================================================
# plan_to_log
# ===========================================================================

class TestPlanToLog:

    def test_log_fields(self):
        profile = UserProfile(focus="movement", onboarding_complete=True)
        plan = plan_daily_suggestion(profile, _past_logs(10), _hrv(RISING_HRV), NOW)
        log = plan_to_log(
            plan,
            date="2026-03-10",
            created_at="2026-03-10T12:00:00",
            focus_used="movement",
            source="manual",
        )
        assert len(log.id) == 32
        assert log.date == "2026-03-10"
        assert log.completed is False
        assert log.mood is None
        assert log.progression == "stretch"
        assert log.trend == "up"
        assert log.data_used == "both"
        assert log.focus_used == "movement"
        assert log.source == "manual"
        assert log.spec == plan.spec
        assert log.suggestion is plan.suggestion

    def test_ids_are_unique(self):
        plan = plan_daily_suggestion(None, [], [], NOW)
        ids = {plan_to_log(plan, "2026-03-10", "").id for _ in range(20)}
        assert len(ids) == 20

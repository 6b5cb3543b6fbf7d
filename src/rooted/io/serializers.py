"""
JSON serialization for suggestion data models.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.config import BIOMETRIC_METRICS, MOOD_SCORES
from ..core.models import (
    DATA_USED_VALUES,
    FOCUS_VALUES,
    PROGRESSION_VALUES,
    SOURCE_VALUES,
    TREND_VALUES,
    BiometricReading,
    DerivedCircadian,
    Mood,
    Screener,
    Suggestion,
    SuggestionLog,
    SuggestionSpec,
    UserProfile,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_timestamp(value: str) -> str:
    """Validate an ISO-8601 datetime string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {value}") from e
    return value


def validate_choice(value: Any, choices: tuple[str, ...], name: str) -> str:
    """
    Validate that a value is one of a fixed set of strings.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {choices}")
    return value


def validate_mood(mood: Any) -> Mood | None:
    """
    Validate an optional mood rating.

    Raises:
        ValidationError: If mood is set but not on the scale
    """
    if mood is None:
        return None
    return validate_choice(mood, tuple(MOOD_SCORES), "mood")  # type: ignore[return-value]


def validate_focus(focus: Any) -> str | None:
    if focus is None:
        return None
    return validate_choice(focus, FOCUS_VALUES, "focus")


def suggestion_to_dict(suggestion: Suggestion) -> dict[str, Any]:
    return {
        "action": suggestion.action,
        "category": suggestion.category,
        "rationale": suggestion.rationale,
        "recovery_score": suggestion.recovery_score,
        "wearable_used": suggestion.wearable_used,
        "evidence_note": suggestion.evidence_note,
    }


def dict_to_suggestion(data: dict[str, Any]) -> Suggestion:
    """
    Convert dict to Suggestion.

    Missing text fields fall back to empty strings; an unknown category
    falls back to mindset.
    """
    category = data.get("category") or "mindset"
    if category not in FOCUS_VALUES:
        category = "mindset"
    try:
        recovery_score = int(data.get("recovery_score", 0) or 0)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid recovery_score: {data.get('recovery_score')!r}") from e
    return Suggestion(
        action=str(data.get("action") or ""),
        category=category,
        rationale=str(data.get("rationale") or ""),
        recovery_score=recovery_score,
        wearable_used=bool(data.get("wearable_used", False)),
        evidence_note=data.get("evidence_note"),
    )


def spec_to_dict(spec: SuggestionSpec) -> dict[str, Any]:
    return {
        "theme": spec.theme,
        "trend": spec.trend,
        "duration_min": spec.duration_min,
        "intensity": spec.intensity,
        "constraints": list(spec.constraints),
    }


def dict_to_spec(data: dict[str, Any]) -> SuggestionSpec:
    """
    Convert dict to SuggestionSpec.

    Raises:
        ValidationError: If a field is missing or invalid
    """
    try:
        duration_min = int(data.get("duration_min", 10))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid duration_min: {data.get('duration_min')!r}") from e

    constraints = data.get("constraints", [])
    if not isinstance(constraints, list):
        raise ValidationError(f"Invalid constraints: {constraints!r}")

    return SuggestionSpec(
        theme=validate_choice(data.get("theme"), FOCUS_VALUES, "theme"),  # type: ignore[arg-type]
        trend=validate_choice(data.get("trend"), TREND_VALUES, "trend"),  # type: ignore[arg-type]
        duration_min=duration_min,
        intensity=validate_choice(
            data.get("intensity"), ("downregulate", "neutral", "light"), "intensity"
        ),  # type: ignore[arg-type]
        constraints=[str(c) for c in constraints],
    )


def suggestion_log_to_dict(log: SuggestionLog) -> dict[str, Any]:
    """
    Convert SuggestionLog to JSON-compatible dict.

    Args:
        log: SuggestionLog to convert

    Returns:
        Dict representation
    """
    return {
        "id": log.id,
        "date": log.date,
        "suggestion": suggestion_to_dict(log.suggestion),
        "spec": spec_to_dict(log.spec) if log.spec is not None else None,
        "completed": log.completed,
        "mood": log.mood,
        "data_used": log.data_used,
        "trend": log.trend,
        "focus_used": log.focus_used,
        "progression": log.progression,
        "source": log.source,
        "created_at": log.created_at,
    }


def dict_to_suggestion_log(data: dict[str, Any]) -> SuggestionLog:
    """
    Convert dict to SuggestionLog.

    Args:
        data: Dict representation

    Returns:
        SuggestionLog instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Suggestion log must be an object, got {type(data).__name__}")
    if "id" not in data or not data["id"]:
        raise ValidationError("Suggestion log is missing 'id'")
    if "date" not in data:
        raise ValidationError("Suggestion log is missing 'date'")

    date = validate_date(data["date"])
    mood = validate_mood(data.get("mood"))
    data_used = validate_choice(data.get("data_used", "none"), DATA_USED_VALUES, "data_used")
    trend = validate_choice(data.get("trend", "unknown"), TREND_VALUES, "trend")
    progression = validate_choice(
        data.get("progression", "base"), PROGRESSION_VALUES, "progression"
    )
    source = validate_choice(data.get("source", "api"), SOURCE_VALUES, "source")

    raw_suggestion = data.get("suggestion") or {}
    if not isinstance(raw_suggestion, dict):
        raise ValidationError(f"Invalid suggestion: {raw_suggestion!r}")

    raw_spec = data.get("spec")
    spec = dict_to_spec(raw_spec) if isinstance(raw_spec, dict) else None

    return SuggestionLog(
        id=str(data["id"]),
        date=date,
        suggestion=dict_to_suggestion(raw_suggestion),
        spec=spec,
        completed=bool(data.get("completed", False)),
        mood=mood,
        data_used=data_used,  # type: ignore[arg-type]
        trend=trend,  # type: ignore[arg-type]
        focus_used=data.get("focus_used"),
        progression=progression,  # type: ignore[arg-type]
        source=source,  # type: ignore[arg-type]
        created_at=str(data.get("created_at") or ""),
    )


def suggestion_log_to_json_line(log: SuggestionLog) -> str:
    """Serialize a log as one compact JSONL line."""
    return json.dumps(suggestion_log_to_dict(log), separators=(",", ":"))


def reading_to_dict(reading: BiometricReading) -> dict[str, Any]:
    return {
        "metric_type": reading.metric_type,
        "value": reading.value,
        "timestamp": reading.timestamp,
    }


def dict_to_reading(data: dict[str, Any]) -> BiometricReading:
    """
    Convert dict to BiometricReading.

    Raises:
        ValidationError: If metric, value or timestamp is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Reading must be an object, got {type(data).__name__}")
    metric_type = validate_choice(data.get("metric_type"), BIOMETRIC_METRICS, "metric_type")
    try:
        value = float(data["value"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid value for {metric_type}: {data.get('value')!r}") from e
    timestamp = validate_timestamp(data.get("timestamp", ""))

    return BiometricReading(metric_type=metric_type, value=value, timestamp=timestamp)


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """
    Convert UserProfile to JSON-compatible dict.
    """
    data: dict[str, Any] = {
        "focus": profile.focus,
        "onboarding_complete": profile.onboarding_complete,
        "screener": None,
        "circadian": None,
    }
    if profile.screener is not None:
        data["screener"] = {
            "self_id": profile.screener.self_id,
            "wake_time": profile.screener.wake_time,
            "bedtime": profile.screener.bedtime,
            "shift_work": profile.screener.shift_work,
        }
    if profile.circadian is not None:
        data["circadian"] = {
            "chronotype": profile.circadian.chronotype,
            "wake_time": profile.circadian.wake_time,
            "bedtime": profile.circadian.bedtime,
            "caffeine_cutoff": profile.circadian.caffeine_cutoff,
            "shift_work": profile.circadian.shift_work,
        }
    return data


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Raises:
        ValidationError: If data is invalid
    """
    focus = validate_focus(data.get("focus"))

    screener: Screener | None = None
    raw_screener = data.get("screener")
    if isinstance(raw_screener, dict):
        try:
            screener = Screener(
                self_id=raw_screener["self_id"],
                wake_time=raw_screener["wake_time"],
                bedtime=raw_screener["bedtime"],
                shift_work=bool(raw_screener.get("shift_work", False)),
            )
        except (KeyError, ValueError) as e:
            raise ValidationError(f"Invalid screener: {e}") from e

    circadian: DerivedCircadian | None = None
    raw_circadian = data.get("circadian")
    if isinstance(raw_circadian, dict):
        try:
            circadian = DerivedCircadian(
                chronotype=validate_choice(
                    raw_circadian["chronotype"], ("lark", "neutral", "owl"), "chronotype"
                ),  # type: ignore[arg-type]
                wake_time=raw_circadian["wake_time"],
                bedtime=raw_circadian["bedtime"],
                caffeine_cutoff=raw_circadian["caffeine_cutoff"],
                shift_work=bool(raw_circadian.get("shift_work", False)),
            )
        except KeyError as e:
            raise ValidationError(f"Invalid circadian profile: missing {e}") from e

    return UserProfile(
        focus=focus,  # type: ignore[arg-type]
        onboarding_complete=bool(data.get("onboarding_complete", False)),
        screener=screener,
        circadian=circadian,
    )

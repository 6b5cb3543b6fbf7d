"""
Activity spec derivation: theme, duration, intensity and constraints.
"""

from .config import (
    BASE_DURATION_MIN,
    DEFAULT_FOCUS,
    DURATION_BUMP_MIN,
    SPEC_CONSTRAINTS,
    clamp_duration,
)
from .models import DataUsed, Focus, Intensity, Progression, SuggestionSpec, Trend


def spec_duration(progression: Progression) -> int:
    """
    Duration in minutes for a tier.

    duration = clamp(10 + bump, 5, 20), bump: base 0, build +3, stretch +5
    """
    return clamp_duration(BASE_DURATION_MIN + DURATION_BUMP_MIN.get(progression, 0))


def spec_intensity(theme: Focus, trend: Trend) -> Intensity:
    """
    Intensity label for a theme under the current biometric trend.

    A downward trend always downregulates. An upward trend allows light
    intensity for movement and stays neutral for other themes. The
    progression tier only affects duration, never intensity.
    """
    if trend == "down":
        return "downregulate"
    if trend == "up":
        return "light" if theme == "movement" else "neutral"
    return "neutral"


def build_spec(
    focus: Focus | None,
    trend: Trend,
    progression: Progression = "base",
) -> SuggestionSpec:
    """
    Derive the concrete activity spec.

    Args:
        focus: Onboarding focus theme; None falls back to breathwork
        trend: HRV trend direction
        progression: Tier from compute_progression

    Returns:
        SuggestionSpec
    """
    theme: Focus = focus if focus is not None else DEFAULT_FOCUS  # type: ignore[assignment]

    return SuggestionSpec(
        theme=theme,
        trend=trend,
        duration_min=spec_duration(progression),
        intensity=spec_intensity(theme, trend),
        constraints=list(SPEC_CONSTRAINTS),
    )


def decide_data_used(has_wearable: bool, has_onboarding: bool) -> DataUsed:
    """Label which inputs informed a suggestion."""
    if has_wearable and has_onboarding:
        return "both"
    if has_wearable:
        return "wearable"
    if has_onboarding:
        return "onboarding"
    return "none"

"""Profile commands: init, set-focus, circadian."""

import json
from typing import Annotated, Optional

import typer

from ...core.circadian import build_derived_circadian, suggest_chronotype_update
from ...core.models import FOCUS_VALUES, Screener, UserProfile, WearableSleepSummary
from ...io.serializers import ValidationError, user_profile_to_dict, validate_focus
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store


@app.command()
def init(
    focus: Annotated[
        Optional[str],
        typer.Option("--focus", help="Focus theme: movement | breathwork | mindset | nutrition"),
    ] = None,
    onboarded: Annotated[
        Optional[bool],
        typer.Option(
            "--onboarded/--not-onboarded",
            help="Whether onboarding answers exist (default: yes when --focus is given)",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing profile without prompting"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Initialize profile, suggestion history and biometrics files.

    Existing history is kept; only the profile is (re)written.
    """
    store = get_store(history_path)

    try:
        validate_focus(focus)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    existing = store.load_profile()
    if existing is not None and not force:
        if not views.confirm_action(f"Profile exists at {store.profile_path}. Overwrite?"):
            views.print_info("Keeping existing profile.")
            store.init()
            raise typer.Exit(0)

    profile = UserProfile(
        focus=focus,  # type: ignore[arg-type]
        onboarding_complete=onboarded if onboarded is not None else focus is not None,
        screener=existing.screener if existing is not None else None,
        circadian=existing.circadian if existing is not None else None,
    )

    store.init()
    store.save_profile(profile)

    views.print_success(f"Initialized rooted at {store.history_path.parent}")
    views.print_info(f"Focus: {profile.focus or 'not set (breathwork by default)'}")


@app.command("set-focus")
def set_focus(
    focus: Annotated[
        str,
        typer.Argument(help="Focus theme: movement | breathwork | mindset | nutrition"),
    ],
    history_path: HistoryPathOption = None,
) -> None:
    """
    Change the focus theme used for new suggestions.
    """
    store = get_store(history_path)
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first.")
        raise typer.Exit(1)

    if focus not in FOCUS_VALUES:
        views.print_error(f"Focus must be one of: {', '.join(FOCUS_VALUES)}")
        raise typer.Exit(1)

    profile.focus = focus  # type: ignore[assignment]
    profile.onboarding_complete = True
    store.save_profile(profile)
    views.print_success(f"Focus set to {focus}")


@app.command()
def circadian(
    self_id: Annotated[
        Optional[str],
        typer.Option("--self-id", help="Morning or evening person: morning | neither | evening"),
    ] = None,
    wake_time: Annotated[
        Optional[str],
        typer.Option("--wake", help="Usual wake time (HH:MM)"),
    ] = None,
    bedtime: Annotated[
        Optional[str],
        typer.Option("--bed", help="Usual bedtime (HH:MM)"),
    ] = None,
    shift_work: Annotated[
        bool,
        typer.Option("--shift-work/--no-shift-work", help="Works rotating or night shifts"),
    ] = False,
    avg_sleep_onset: Annotated[
        Optional[str],
        typer.Option("--avg-sleep-onset", help="Wearable average sleep onset (HH:MM)"),
    ] = None,
    avg_wake: Annotated[
        Optional[str],
        typer.Option("--avg-wake", help="Wearable average wake time (HH:MM)"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Set or show circadian settings (chronotype, caffeine cutoff).

    With screener answers, derives and saves the circadian profile. Without,
    shows the saved one. Given wearable sleep averages, also checks whether
    a different chronotype fits better.
    """
    store = get_store(history_path)
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first.")
        raise typer.Exit(1)

    answers = (self_id, wake_time, bedtime)
    if any(a is not None for a in answers):
        if not all(a is not None for a in answers):
            views.print_error("--self-id, --wake and --bed must be given together")
            raise typer.Exit(1)
        try:
            screener = Screener(
                self_id=self_id,  # type: ignore[arg-type]
                wake_time=wake_time,  # type: ignore[arg-type]
                bedtime=bedtime,  # type: ignore[arg-type]
                shift_work=shift_work,
            )
            derived = build_derived_circadian(screener)
        except ValueError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        profile.screener = screener
        profile.circadian = derived
        store.save_profile(profile)
    elif profile.circadian is None:
        views.print_error("No circadian profile yet. Pass --self-id, --wake and --bed.")
        raise typer.Exit(1)

    derived = profile.circadian
    update = None
    if avg_sleep_onset is not None or avg_wake is not None:
        update = suggest_chronotype_update(
            derived,
            WearableSleepSummary(
                stable=True,
                avg_sleep_onset_local=avg_sleep_onset,
                avg_wake_local=avg_wake,
            ),
        )

    if json_out:
        out = user_profile_to_dict(profile)["circadian"]
        out["suggestion"] = (
            {"reason": update.reason, "suggested_chronotype": update.suggested_chronotype}
            if update is not None
            else None
        )
        print(json.dumps(out, indent=2))
        return

    views.print_circadian(derived, update)

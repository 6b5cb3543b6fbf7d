"""
CLI entry point using Typer.

Provides commands for daily suggestions:
- init: Initialize profile and history
- suggest: Show (or generate) today's suggestion
- complete: Mark a suggestion done and rate mood
- show-history: Display suggestion history
- delete-record: Remove a suggestion
- log-biometric: Record a wearable reading
- status: Tier, completion stats and recovery
- progress: Weekly adherence and mood charts
- set-focus / circadian: Onboarding settings
"""

import typer

from ..logging_config import configure_logging
from . import views
from .app import app
from .commands import analysis, biometrics, profile, suggestions  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    Daily wellness suggestions. Run without a command for interactive mode.
    """
    configure_logging()

    if ctx.invoked_subcommand is not None:
        return  # Sub-command handles it

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]rooted[/bold cyan]: one small thing for today")
    views.console.print()

    menu = {
        "1": ("suggest",      "Today's suggestion"),
        "2": ("complete",     "Mark today's suggestion done"),
        "3": ("show-history", "Show history"),
        "4": ("status",       "Current status"),
        "5": ("progress",     "Adherence and mood charts"),
        "0": ("quit",         "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = {k: v[0] for k, v in menu.items()}.get(choice)

    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "suggest":
        ctx.invoke(suggestions.suggest)
    elif chosen == "complete":
        mood = views.console.input("Mood? (sad/neutral/smile/grin, Enter to skip): ").strip()
        ctx.invoke(suggestions.complete, mood=mood or None)
    elif chosen == "show-history":
        ctx.invoke(suggestions.show_history)
    elif chosen == "status":
        ctx.invoke(biometrics.status)
    elif chosen == "progress":
        ctx.invoke(analysis.progress)


if __name__ == "__main__":
    app()

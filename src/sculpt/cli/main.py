"""
CLI entry point using Typer.

Provides commands for logging workouts:
- workout: Interactive session editor
- log-session: Log a finished session in one command
- history: Display finished sessions
- stats: Overall statistics and personal records
- pr: Personal record for one exercise
- library: Exercise catalog and templates
"""

import typer

from . import views
from .app import app
from .commands.analysis import show_history, show_library, stats
from .commands.sessions import workout


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    Workout logger. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return

    views.console.print()
    views.console.print("[bold cyan]sculpt[/bold cyan] — workout logger")
    views.console.print()

    menu = {
        "1": ("workout",  "Start empty session"),
        "2": ("template", "Start session from a template"),
        "3": ("history",  "Show history"),
        "4": ("stats",    "Statistics & personal records"),
        "5": ("library",  "Exercise library"),
        "0": ("quit",     "Quit"),
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

    if chosen == "workout":
        ctx.invoke(workout)
    elif chosen == "template":
        _menu_template(ctx)
    elif chosen == "history":
        ctx.invoke(show_history)
    elif chosen == "stats":
        ctx.invoke(stats)
    elif chosen == "library":
        ctx.invoke(show_library)


def _menu_template(ctx: typer.Context) -> None:
    """Pick a template by number and start a seeded session."""
    from ..core.library import get_library

    templates = get_library().list_templates()
    for i, t in enumerate(templates, 1):
        views.console.print(f"  \\[{i}] [cyan]{t.name}[/cyan]  [dim]{t.summary}[/dim]")

    while True:
        raw = views.console.input("Template # (Enter to cancel): ").strip()
        if not raw:
            views.print_info("Cancelled.")
            return
        try:
            idx = int(raw)
        except ValueError:
            views.print_error("Enter a number")
            continue
        if 1 <= idx <= len(templates):
            ctx.invoke(workout, template=templates[idx - 1].name)
            return
        views.print_error(f"Enter a number between 1 and {len(templates)}")


if __name__ == "__main__":
    app()

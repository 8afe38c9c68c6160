"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and the plain-text history / statistics reports.
"""

from datetime import datetime
from typing import Sequence

from rich.console import Console
from rich.table import Table

from ..core.config import WEIGHT_UNIT
from ..core.library import ExerciseLibrary
from ..core.models import Session
from ..io.history_store import HistoryStore

SEPARATOR = "-" * 42

console = Console()


def format_session_date(created_at: datetime) -> str:
    """Format a session timestamp like "Oct 19, 2026 18:05"."""
    return f"{created_at:%b} {created_at.day}, {created_at:%Y %H:%M}"


def format_session_table(session: Session, timer_label: str | None = None) -> Table:
    """
    Build the active-session table.

    Template placeholder rows (nothing entered yet) show "-" in every
    numeric column.

    Args:
        session: Session being edited
        timer_label: Elapsed-time label shown in the title

    Returns:
        Rich Table
    """
    title = "Current Session"
    if timer_label is not None:
        title += f"  [bold]{timer_label}[/bold]"
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column(f"Weight ({WEIGHT_UNIT})", justify="right")
    table.add_column("Volume", justify="right", style="bold")

    for i, entry in enumerate(session.entries, 1):
        if entry.sets == 0 and entry.reps == 0 and entry.weight == 0:
            table.add_row(str(i), entry.name, "-", "-", "-", "-")
            continue
        table.add_row(
            str(i),
            entry.name,
            str(entry.sets),
            str(entry.reps),
            f"{entry.weight:.1f}",
            f"{entry.volume:.1f}",
        )
    return table


def format_history_text(store: HistoryStore, sessions: Sequence[Session] | None = None) -> str:
    """
    Render session history, newest first.

    Each session lists its exercises grouped by name with the summed set
    count and the best (max-volume) set.

    Args:
        store: History store providing the grouped summaries
        sessions: Subset of sessions to render (default: all)

    Returns:
        Multi-line report
    """
    lines: list[str] = []
    for session in store if sessions is None else sessions:
        lines.append(SEPARATOR)
        lines.append(f"Session on {format_session_date(session.created_at)}")
        for group in store.grouped_summary(session):
            lines.append(f" {group.total_sets} sets x {group.name}")
            lines.append(
                f"  Best set: {group.best_weight:.1f} {WEIGHT_UNIT} x {group.best_reps} reps"
            )
        lines.append("")
    return "\n".join(lines)


def format_stats_text(store: HistoryStore, library: ExerciseLibrary) -> str:
    """
    Render overall statistics and per-exercise personal records.

    Args:
        store: History store to aggregate
        library: Catalog whose exercises get a PR line each

    Returns:
        Multi-line report
    """
    lines = [
        "Overall Statistics:",
        f" Total Sessions: {store.total_sessions()}",
        f" Total Volume All Time: {store.total_volume_all_time():.1f} {WEIGHT_UNIT}",
        "",
        "Personal Records (Estimated 1RM):",
    ]
    for name, pr in store.personal_records(library.exercise_names()).items():
        lines.append(f" {name}: {pr:.1f} {WEIGHT_UNIT}")
    return "\n".join(lines)


def print_session(session: Session, timer_label: str | None = None) -> None:
    """Print the active session table."""
    if session.is_empty():
        console.print("[dim]No exercises yet.[/dim]")
        return
    console.print(format_session_table(session, timer_label))
    console.print(f"Total volume: [bold]{session.total_volume:.1f} {WEIGHT_UNIT}[/bold]")


def print_history(store: HistoryStore, sessions: Sequence[Session] | None = None) -> None:
    """
    Print session history to console.

    Args:
        store: History store
        sessions: Sessions to display (default: all)
    """
    if not store.sessions or (sessions is not None and not sessions):
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return
    console.print(format_history_text(store, sessions), markup=False, highlight=False)


def print_stats(store: HistoryStore, library: ExerciseLibrary) -> None:
    console.print(format_stats_text(store, library), markup=False, highlight=False)


def print_library(library: ExerciseLibrary) -> None:
    """Print the numbered catalog and the templates with their summaries."""
    table = Table(title="Exercises", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Muscle group", style="magenta")
    for i, entry in enumerate(library.list_exercises(), 1):
        name, muscle_group = library.parse_entry(entry)
        table.add_row(str(i), name, muscle_group)
    console.print(table)

    console.print()
    console.print("[bold]Templates[/bold]")
    for template in library.list_templates():
        console.print(f"  [cyan]{template.name}[/cyan]  [dim]{template.summary}[/dim]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} \\[y/N]: ")
    return response.lower() in ("y", "yes")

"""Session commands: workout (interactive), log-session, and helpers."""

import json
from typing import Annotated, Optional

import typer

from ...core.errors import EmptySessionError, InputError
from ...core.library import ExerciseLibrary, get_library
from ...core.models import EDITABLE_FIELDS, Session
from ...core.session_builder import SessionBuilder
from ...io.history_store import HistoryStore
from ...io.serializers import session_to_dict
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store

WORKOUT_MENU = {
    "a": "Add exercise",
    "e": "Edit a row",
    "s": "Show session",
    "f": "Finish session",
    "q": "Quit without saving",
}


def _choose_exercise(library: ExerciseLibrary) -> str | None:
    """Prompt for a catalog entry by number or by typing it; None on empty input."""
    exercises = library.list_exercises()
    for i, entry in enumerate(exercises, 1):
        views.console.print(f"  \\[{i}] {entry}", highlight=False)
    while True:
        raw = views.console.input("Exercise # or name (Enter to cancel): ").strip()
        if not raw:
            return None
        if raw.isdigit():
            idx = int(raw)
            if 1 <= idx <= len(exercises):
                return exercises[idx - 1]
            views.print_error(f"Enter a number between 1 and {len(exercises)}")
            continue
        return raw


def _menu_add(builder: SessionBuilder, library: ExerciseLibrary) -> None:
    entry = _choose_exercise(library)
    if entry is None:
        return
    sets = views.console.input("Sets: ").strip()
    reps = views.console.input("Reps: ").strip()
    weight = views.console.input("Weight: ").strip()
    try:
        record = builder.add_exercise(entry, sets, reps, weight)
    except InputError as e:
        views.print_error(str(e))
        return
    views.print_success(f"Added {record.name}: {record.sets} x {record.reps} @ {record.weight:.1f}")


def _menu_edit(builder: SessionBuilder) -> None:
    if builder.session.is_empty():
        views.print_info("Nothing to edit yet.")
        return
    views.print_session(builder.session, builder.timer.label())
    raw_row = views.console.input("Row #: ").strip()
    try:
        row = int(raw_row)
    except ValueError:
        views.print_error("Enter a row number")
        return
    field_name = views.console.input(f"Field ({'/'.join(EDITABLE_FIELDS)}): ").strip().lower()
    raw_value = views.console.input("New value: ").strip()
    try:
        record = builder.edit_field(row - 1, field_name, raw_value)
    except InputError as e:
        views.print_error(str(e))
        return
    views.print_success(f"Updated {record.name}: volume {record.volume:.1f}")


def _print_saved(store: HistoryStore, session: Session) -> None:
    views.print_success("Session saved!")
    views.print_history(store, [session])


def run_workout(store: HistoryStore, template_name: str | None = None) -> Session | None:
    """
    Interactive session editor.

    Returns:
        The committed session, or None if the user quit or finished empty
    """
    library = get_library()
    template = library.get_template(template_name) if template_name else None

    tick: dict[str, str] = {}
    builder = SessionBuilder(store, on_tick=lambda label: tick.update(label=label))
    builder.start_session(template)
    views.print_info(f"New Session Started: {template.name if template else 'Custom Workout'}")
    if template is not None:
        views.print_session(builder.session, builder.timer.label())

    try:
        while True:
            views.console.print()
            views.console.print(
                "  ".join(f"\\[{k}] {desc}" for k, desc in WORKOUT_MENU.items())
            )
            choice = views.console.input(
                f"[dim]{tick.get('label', builder.timer.label())}[/dim] Choose: "
            ).strip().lower()

            if choice == "a":
                _menu_add(builder, library)
            elif choice == "e":
                _menu_edit(builder)
            elif choice == "s":
                views.print_session(builder.session, builder.timer.label())
            elif choice == "f":
                try:
                    finished = builder.finish()
                except EmptySessionError as e:
                    views.print_warning(str(e))
                    return None
                _print_saved(store, finished)
                return finished
            elif choice == "q":
                if not builder.session.is_empty() and not views.confirm_action(
                    f"Discard {len(builder.session.entries)} unsaved exercise(s)?"
                ):
                    continue
                views.print_info("Session discarded.")
                return None
            else:
                views.print_error(f"Unknown choice: {choice}")
    finally:
        builder.timer.stop()


@app.command("workout")
def workout(
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Seed the session from a template, e.g. 'Upper Body'"),
    ] = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Start an interactive workout session.

    Add exercises, edit rows, then finish to save the session to history.
    """
    store = get_store(history_path)
    try:
        run_workout(store, template)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command("log-session")
def log_session(
    exercise: Annotated[
        list[str],
        typer.Option("--exercise", "-e", help="Catalog entry, e.g. 'Squat (Legs)' (repeatable)"),
    ],
    sets: Annotated[
        list[str],
        typer.Option("--sets", "-s", help="Sets for the matching --exercise (repeatable)"),
    ],
    reps: Annotated[
        list[str],
        typer.Option("--reps", "-r", help="Reps for the matching --exercise (repeatable)"),
    ],
    weight: Annotated[
        list[str],
        typer.Option("--weight", "-w", help="Weight for the matching --exercise (repeatable)"),
    ],
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Log a finished session in one go.

    Options are matched up in order:

      sculpt log-session -e "Squat (Legs)" -s 3 -r 5 -w 225 \\
        -e "Deadlift (Back)" -s 1 -r 5 -w 315
    """
    if not (len(exercise) == len(sets) == len(reps) == len(weight)):
        views.print_error("--exercise, --sets, --reps and --weight must be given the same number of times")
        raise typer.Exit(1)

    store = get_store(history_path)
    builder = SessionBuilder(store)

    for entry, s, r, w in zip(exercise, sets, reps, weight):
        try:
            builder.add_exercise(entry, s, r, w)
        except InputError as e:
            views.print_error(f"{entry}: {e}")
            raise typer.Exit(1)

    try:
        finished = builder.finish()
    except EmptySessionError as e:
        views.print_warning(str(e))
        raise typer.Exit(1)

    if json_out:
        out = session_to_dict(finished)
        out["total_volume"] = finished.total_volume
        print(json.dumps(out, indent=2))
        return

    _print_saved(store, finished)

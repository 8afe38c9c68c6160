"""Analysis commands: history, stats, pr, library."""

import json
from typing import Annotated, Optional

import typer

from ...core.library import get_library
from ...io.serializers import session_to_dict
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store


@app.command("history")
def show_history(
    history_path: HistoryPathOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", min=0, help="Limit number of sessions to show (newest first)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display finished sessions, newest first.
    """
    store = get_store(history_path)
    sessions = store.sessions if limit is None else store.sessions[:limit]

    if json_out:
        output = []
        for s in sessions:
            d = session_to_dict(s)
            d["total_volume"] = s.total_volume
            d["groups"] = [
                {
                    "name": g.name,
                    "total_sets": g.total_sets,
                    "best_weight": g.best_weight,
                    "best_reps": g.best_reps,
                }
                for g in store.grouped_summary(s)
            ]
            output.append(d)
        print(json.dumps(output, indent=2))
        return

    views.print_history(store, sessions)


@app.command("stats")
def stats(
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show total sessions, all-time volume and personal records.
    """
    store = get_store(history_path)
    library = get_library()

    if json_out:
        print(json.dumps({
            "total_sessions": store.total_sessions(),
            "total_volume_all_time": store.total_volume_all_time(),
            "personal_records": store.personal_records(library.exercise_names()),
        }, indent=2))
        return

    views.print_stats(store, library)


@app.command("pr")
def personal_record(
    name: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Bench Press'")],
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the personal record (best estimated 1RM) for one exercise.
    """
    store = get_store(history_path)
    pr = store.personal_record(name)

    if json_out:
        print(json.dumps({"exercise": name, "estimated_1rm": pr}, indent=2))
        return

    if pr == 0:
        views.print_info(f"No sets logged for {name}.")
        return
    views.console.print(f"{name}: [bold]{pr:.1f} {views.WEIGHT_UNIT}[/bold] (estimated 1RM)")


@app.command("library")
def show_library(json_out: JsonOption = False) -> None:
    """
    List the exercise catalog and workout templates.
    """
    library = get_library()

    if json_out:
        print(json.dumps({
            "exercises": library.list_exercises(),
            "templates": [
                {"name": t.name, "exercises": list(t.exercises), "summary": t.summary}
                for t in library.list_templates()
            ],
        }, indent=2))
        return

    views.print_library(library)

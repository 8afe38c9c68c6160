"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.history_store import HistoryStore, get_default_history_path

# Shared --history-path option type used across all commands
HistoryPathOption = Annotated[
    Optional[Path],
    typer.Option("--history-path", "-p", help="Path to history JSONL file"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="sculpt",
    help="Sculpt: log workout sessions and track personal records.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(history_path: Path | None) -> HistoryStore:
    """Get a loaded history store from path or the default location."""
    if history_path is None:
        history_path = get_default_history_path()
    store = HistoryStore(history_path)
    store.load()
    return store

"""
JSONL-based history storage for finished workout sessions.

Holds the in-memory history (newest first), answers the aggregate
queries, and mirrors the history to disk after every commit.
"""

import os
import tempfile
import warnings
from pathlib import Path
from typing import Iterator, Sequence

from ..core import metrics
from ..core.config import DATA_DIR_NAME, HISTORY_FILENAME
from ..core.models import ExerciseGroupSummary, ExerciseRecord, Session
from .serializers import ValidationError, json_line_to_session, session_to_json_line


class HistoryStore:
    """
    Manages workout history stored in JSONL format.

    The history file contains one JSON session object per line, newest
    first. The in-memory list is the source of truth: a failed save is
    reported with a warning and never rolls back a commit, so memory and
    disk may differ until the next successful save.
    """

    def __init__(self, history_path: str | Path | None = None):
        """
        Initialize an empty history store.

        Args:
            history_path: Path to the JSONL history file, or None for an
                in-memory store that never persists
        """
        self.history_path = Path(history_path) if history_path is not None else None
        self.sessions: list[Session] = []

    def __len__(self) -> int:
        return len(self.sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path is not None and self.history_path.exists()

    def load(self) -> list[Session]:
        """
        Replace the in-memory history with the contents of the history file.

        A missing file gives an empty history. An unreadable or corrupt file
        also gives an empty history (with a warning) rather than an error.

        Returns:
            Loaded sessions, newest first
        """
        self.sessions = []
        if not self.exists():
            return self.sessions

        assert self.history_path is not None
        sessions: list[Session] = []
        try:
            with open(self.history_path, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        sessions.append(json_line_to_session(line))
                    except ValidationError as e:
                        raise ValidationError(
                            f"Error parsing line {line_num} in {self.history_path}: {e}"
                        ) from e
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            warnings.warn(
                f"sculpt: could not load history ({e}); starting with an empty history",
                stacklevel=2,
            )
            return self.sessions

        self.sessions = sessions
        return self.sessions

    def save(self) -> bool:
        """
        Write the whole history to disk atomically.

        Returns:
            True if the file was written (or there is nowhere to write),
            False if writing failed
        """
        if self.history_path is None:
            return True
        try:
            self._write_sessions(self.sessions)
        except OSError as e:
            warnings.warn(
                f"sculpt: could not save history to {self.history_path} ({e})",
                stacklevel=2,
            )
            return False
        return True

    def _write_sessions(self, sessions: Sequence[Session]) -> None:
        """
        Write all sessions to the history file via a temp file + rename.

        Args:
            sessions: Sessions to write, newest first
        """
        assert self.history_path is not None
        self.history_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.history_path.name}.", dir=self.history_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for session in sessions:
                    f.write(session_to_json_line(session) + "\n")
            os.replace(tmp_name, self.history_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def commit(self, session: Session) -> bool:
        """
        Add a finished session at the front of the history and persist.

        Args:
            session: Session to commit

        Returns:
            Whether the save succeeded (the in-memory commit always stands)
        """
        self.sessions.insert(0, session)
        return self.save()

    def latest(self) -> Session | None:
        """Most recently committed session, or None if no history."""
        return self.sessions[0] if self.sessions else None

    def total_sessions(self) -> int:
        return len(self.sessions)

    def total_volume_all_time(self) -> float:
        return metrics.total_volume(self.sessions)

    def personal_record(self, exercise_name: str) -> float:
        """Best estimated 1RM for an exercise (case-insensitive), 0.0 if never logged."""
        return metrics.personal_record(self.sessions, exercise_name)

    def personal_records(self, exercise_names: Sequence[str]) -> dict[str, float]:
        """PR for each name, keyed in the given order."""
        return {name: self.personal_record(name) for name in exercise_names}

    def best_set_for(self, exercise_name: str, entries: Sequence[ExerciseRecord]) -> ExerciseRecord | None:
        """Max-volume entry for one exercise within a session's entries."""
        return metrics.best_set_for(exercise_name, entries)

    def grouped_summary(self, session: Session) -> list[ExerciseGroupSummary]:
        return metrics.grouped_summary(session)


def get_default_history_path() -> Path:
    """
    Get the default history file path.

    Returns:
        ~/.sculpt/history.jsonl
    """
    return Path.home() / DATA_DIR_NAME / HISTORY_FILENAME

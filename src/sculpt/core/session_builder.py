"""
Editing context for the active, not-yet-committed session.

SessionBuilder owns the open Session and its timer. Finishing hands the
session to a history store and opens a fresh empty one.
"""

import math
from datetime import datetime
from typing import Callable, Protocol

from .errors import EmptySessionError, InputError
from .library.base import WorkoutTemplate, parse_entry
from .models import EDITABLE_FIELDS, ExerciseRecord, Session
from .timer import SessionTimer, TickCallback

INVALID_INPUT_MESSAGE = "Input must be positive numbers."


class SessionSink(Protocol):
    """Anything that can take ownership of a finished session."""

    def commit(self, session: Session) -> bool: ...


def parse_int_input(raw: str | int, name: str) -> int:
    """
    Parse a whole-number field (sets or reps).

    Raises:
        InputError: If the value is not an integer
    """
    if isinstance(raw, bool):
        raise InputError(f"{name} must be a whole number, got {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError as e:
        raise InputError(f"{name} must be a whole number, got {raw!r}") from e


def parse_float_input(raw: str | float, name: str) -> float:
    """
    Parse a decimal field (weight).

    Raises:
        InputError: If the value is not a finite number
    """
    if isinstance(raw, bool):
        raise InputError(f"{name} must be a number, got {raw!r}")
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError) as e:
        raise InputError(f"{name} must be a number, got {raw!r}") from e
    if not math.isfinite(value):
        raise InputError(f"{name} must be a finite number, got {raw!r}")
    return value


class SessionBuilder:
    """
    Manage the currently open Session.

    Args:
        store: Receives finished sessions (normally a HistoryStore)
        timer: Elapsed-time ticker; a fresh SessionTimer by default
        on_tick: Receives the elapsed-time label once per tick
        on_change: Called after every successful mutation
        clock: Timestamp source for new sessions
    """

    def __init__(
        self,
        store: SessionSink,
        timer: SessionTimer | None = None,
        on_tick: TickCallback | None = None,
        on_change: Callable[[], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.timer = timer if timer is not None else SessionTimer()
        self.on_tick = on_tick
        self.on_change = on_change
        self._clock = clock
        self.session = Session(created_at=clock())

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def start_session(self, template: WorkoutTemplate | None = None) -> Session:
        """
        Discard the open session and start a new one.

        Template entries are added as zero placeholders (sets, reps and
        weight all 0) to be filled in with edit_field.
        """
        self.timer.stop()
        session = Session(created_at=self._clock())
        if template is not None:
            for entry in template.exercises:
                name, muscle_group = parse_entry(entry)
                session.add_entry(ExerciseRecord(name=name, muscle_group=muscle_group))
        self.session = session
        self.timer.start(self.on_tick)
        self._changed()
        return session

    def add_exercise(
        self,
        entry: str,
        sets: str | int,
        reps: str | int,
        weight: str | float,
    ) -> ExerciseRecord:
        """
        Append a new exercise to the open session.

        All three values must parse and be strictly positive.

        Raises:
            InputError: On any invalid value; the session is left unchanged
        """
        try:
            n_sets = parse_int_input(sets, "sets")
            n_reps = parse_int_input(reps, "reps")
            load = parse_float_input(weight, "weight")
        except InputError as e:
            raise InputError(INVALID_INPUT_MESSAGE) from e
        if n_sets <= 0 or n_reps <= 0 or load <= 0:
            raise InputError(INVALID_INPUT_MESSAGE)

        name, muscle_group = parse_entry(entry)
        record = ExerciseRecord(
            name=name, muscle_group=muscle_group, sets=n_sets, reps=n_reps, weight=load
        )
        self.session.add_entry(record)
        self._changed()
        return record

    def edit_field(self, index: int, field_name: str, raw_value: str | int | float) -> ExerciseRecord:
        """
        Change sets, reps or weight of an existing row.

        Zero is accepted so a row can be reset.

        Raises:
            InputError: If the value does not parse for that field
        """
        if field_name not in EDITABLE_FIELDS:
            raise InputError(
                f"Unknown field {field_name!r}. Must be one of {', '.join(EDITABLE_FIELDS)}"
            )
        if field_name == "weight":
            value: int | float = parse_float_input(raw_value, field_name)  # type: ignore[arg-type]
        else:
            value = parse_int_input(raw_value, field_name)  # type: ignore[arg-type]
        record = self.session.update_field(index, field_name, value)
        self._changed()
        return record

    def finish(self) -> Session:
        """
        Commit the open session and start an empty one.

        The timer is stopped whether or not anything is committed.

        Returns:
            The committed session

        Raises:
            EmptySessionError: If the session has no exercises
        """
        self.timer.stop()
        if self.session.is_empty():
            raise EmptySessionError()
        finished = self.session
        self.store.commit(finished)
        self.session = Session(created_at=self._clock())
        self._changed()
        return finished

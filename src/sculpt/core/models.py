"""
Data models for sculpt.

ExerciseRecord is one performed movement, Session is one workout occasion.
Derived values (volume, estimated 1RM) are properties so that in-place edits
are always reflected in later queries.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .config import ONE_RM_REP_DIVISOR
from .errors import InputError

EDITABLE_FIELDS: tuple[str, ...] = ("sets", "reps", "weight")


@dataclass
class ExerciseRecord:
    """
    A single exercise performed within a session.

    Template-seeded records start with sets=reps=weight=0 and are filled in
    later through Session.update_field.
    """

    name: str
    muscle_group: str
    sets: int = 0
    reps: int = 0
    weight: float = 0.0

    def __post_init__(self) -> None:
        """Validate record data."""
        if self.sets < 0:
            raise ValueError("sets must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")

    @property
    def volume(self) -> float:
        """Workload proxy: sets x reps x weight."""
        return self.sets * self.reps * self.weight

    @property
    def estimated_one_rep_max(self) -> float:
        """Epley estimate: weight x (1 + reps / 30)."""
        return self.weight * (1 + self.reps / ONE_RM_REP_DIVISOR)

    @property
    def performance_metric(self) -> float:
        """Metric used for personal records (the estimated 1RM)."""
        return self.estimated_one_rep_max


@dataclass
class Session:
    """
    One workout occasion: an ordered list of exercise records.

    Entries are append-only while the session is being edited; individual
    fields change only through update_field.
    """

    created_at: datetime = field(default_factory=datetime.now)
    entries: list[ExerciseRecord] = field(default_factory=list)

    @property
    def total_volume(self) -> float:
        """Sum of entry volumes."""
        return sum(e.volume for e in self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def add_entry(self, record: ExerciseRecord) -> None:
        self.entries.append(record)

    def update_field(self, index: int, field_name: str, value: int | float) -> ExerciseRecord:
        """
        Set one numeric field of the entry at ``index``.

        Args:
            index: 0-based entry index
            field_name: "sets", "reps" or "weight"
            value: New value (zero allowed, negative rejected)

        Returns:
            The updated record

        Raises:
            InputError: If index, field or value is invalid
        """
        if index < 0 or index >= len(self.entries):
            raise InputError(
                f"Row {index + 1} does not exist (session has {len(self.entries)} rows)"
            )
        if field_name not in EDITABLE_FIELDS:
            raise InputError(
                f"Unknown field {field_name!r}. Must be one of {', '.join(EDITABLE_FIELDS)}"
            )
        if value < 0:
            raise InputError(f"{field_name} must be non-negative, got {value}")

        record = self.entries[index]
        if field_name == "weight":
            record.weight = float(value)
        else:
            setattr(record, field_name, int(value))
        return record


@dataclass(frozen=True)
class ExerciseGroupSummary:
    """
    Per-exercise roll-up of one session, used by the history view.

    best_weight / best_reps come from the single max-volume entry.
    """

    name: str
    total_sets: int
    best_weight: float
    best_reps: int

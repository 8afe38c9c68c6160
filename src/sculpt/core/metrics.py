"""
Pure metric computation functions.

All functions are pure and typed for testability. Aggregations are
recomputed from the records on every call; nothing is cached.
"""

from typing import Iterable, Sequence

from .config import ONE_RM_REP_DIVISOR
from .models import ExerciseGroupSummary, ExerciseRecord, Session


def volume(sets: int, reps: int, weight: float) -> float:
    """
    Calculate training volume.

    volume = sets * reps * weight

    Args:
        sets: Number of sets
        reps: Reps per set
        weight: Load per rep

    Returns:
        Volume in weight units
    """
    return sets * reps * weight


def estimated_one_rep_max(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max with the Epley formula.

    1RM = weight * (1 + reps / 30)

    Monotonically non-decreasing in both weight and reps.

    Args:
        weight: Load lifted
        reps: Reps completed at that load

    Returns:
        Estimated 1RM in weight units
    """
    return weight * (1 + reps / ONE_RM_REP_DIVISOR)


def names_match(a: str, b: str) -> bool:
    """Case-insensitive exact comparison of exercise names."""
    return a.lower() == b.lower()


def total_volume(sessions: Iterable[Session]) -> float:
    """Sum of session volumes."""
    return sum(s.total_volume for s in sessions)


def personal_record(sessions: Iterable[Session], exercise_name: str) -> float:
    """
    Highest estimated 1RM recorded for an exercise.

    Args:
        sessions: Sessions to scan
        exercise_name: Exercise name (matched case-insensitively)

    Returns:
        Best estimated 1RM, or 0.0 if the exercise was never logged
    """
    best = 0.0
    for session in sessions:
        for entry in session.entries:
            if names_match(entry.name, exercise_name):
                best = max(best, entry.estimated_one_rep_max)
    return best


def best_set_for(exercise_name: str, entries: Sequence[ExerciseRecord]) -> ExerciseRecord | None:
    """
    Entry with the largest volume among entries for one exercise.

    The first entry wins ties.

    Args:
        exercise_name: Exercise name (matched case-insensitively)
        entries: Entries of a single session

    Returns:
        Best entry or None if the exercise is absent
    """
    best: ExerciseRecord | None = None
    for entry in entries:
        if not names_match(entry.name, exercise_name):
            continue
        if best is None or entry.volume > best.volume:
            best = entry
    return best


def grouped_summary(session: Session) -> list[ExerciseGroupSummary]:
    """
    Group a session's entries by exercise name.

    Groups keep the order in which each name first appears. Names are
    grouped exactly (as stored), the same way the history view lists them.

    Args:
        session: Session to summarize

    Returns:
        One ExerciseGroupSummary per distinct exercise name
    """
    groups: dict[str, list[ExerciseRecord]] = {}
    for entry in session.entries:
        groups.setdefault(entry.name, []).append(entry)

    summaries: list[ExerciseGroupSummary] = []
    for name, entries in groups.items():
        best = max(entries, key=lambda e: e.volume)
        summaries.append(
            ExerciseGroupSummary(
                name=name,
                total_sets=sum(e.sets for e in entries),
                best_weight=best.weight,
                best_reps=best.reps,
            )
        )
    return summaries

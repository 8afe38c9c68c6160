"""
Base types for the exercise library.

Catalog entries are plain "Name (MuscleGroup)" strings. WorkoutTemplate
holds a named list of such entries used to seed a new session.
"""

from dataclasses import dataclass

from ..config import NO_TEMPLATE_EXERCISES, SUMMARY_ELLIPSIS, UNKNOWN_MUSCLE_GROUP


def parse_entry(entry: str) -> tuple[str, str]:
    """
    Split a catalog entry into (name, muscle_group).

    "Squat (Legs)" -> ("Squat", "Legs"). The split happens on the first
    " ("; the trailing ")" is stripped from the remainder. Entries without
    " (" get the UNKNOWN_MUSCLE_GROUP placeholder. Never raises.
    """
    name, sep, rest = entry.partition(" (")
    if not sep:
        return entry.strip(), UNKNOWN_MUSCLE_GROUP
    muscle_group = rest[:-1] if rest.endswith(")") else rest
    return name.strip(), muscle_group.strip() or UNKNOWN_MUSCLE_GROUP


@dataclass(frozen=True)
class WorkoutTemplate:
    """A named list of catalog entries."""

    name: str
    exercises: tuple[str, ...]

    @property
    def summary(self) -> str:
        """One-line preview: the first one or two entries, then "..." if more exist."""
        if not self.exercises:
            return NO_TEMPLATE_EXERCISES
        shown = ", ".join(self.exercises[:2])
        if len(self.exercises) > 2:
            return f"{shown}, {SUMMARY_ELLIPSIS}"
        return shown


@dataclass(frozen=True)
class ExerciseLibrary:
    """
    Static catalog of exercises plus named templates.

    Frozen and tuple-backed: nothing mutates the library after loading.
    """

    exercises: tuple[str, ...]
    templates: tuple[WorkoutTemplate, ...] = ()

    def list_exercises(self) -> list[str]:
        return list(self.exercises)

    def list_templates(self) -> list[WorkoutTemplate]:
        return list(self.templates)

    def exercise_names(self) -> list[str]:
        """Catalog names without their muscle groups."""
        return [parse_entry(e)[0] for e in self.exercises]

    def parse_entry(self, entry: str) -> tuple[str, str]:
        return parse_entry(entry)

    def get_template(self, name: str) -> WorkoutTemplate:
        """
        Return the template with the given name (case-insensitive).

        Raises:
            ValueError: If no template has that name
        """
        for template in self.templates:
            if template.name.lower() == name.lower():
                return template
        valid = ", ".join(t.name for t in self.templates)
        raise ValueError(f"Unknown template '{name}'. Valid templates: {valid}")

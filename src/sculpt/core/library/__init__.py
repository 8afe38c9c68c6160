"""
Exercise library for sculpt.

The catalog and workout templates are loaded once from YAML and are
read-only afterwards.
"""

from .base import ExerciseLibrary, WorkoutTemplate, parse_entry
from .registry import LIBRARY, get_library

__all__ = [
    "ExerciseLibrary",
    "WorkoutTemplate",
    "parse_entry",
    "LIBRARY",
    "get_library",
]

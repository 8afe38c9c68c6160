"""
Exercise library registry.

The process-wide library is built once at import time from YAML (see
loader.py). If no valid catalog can be loaded a RuntimeError is raised;
the application cannot start without one.

User overrides: place a library.yaml in ``~/.sculpt/``.
"""

from .base import ExerciseLibrary


def _build_library() -> ExerciseLibrary:
    from .loader import load_library_from_yaml

    loaded = load_library_from_yaml()
    if loaded is None:
        raise RuntimeError(
            "sculpt: no exercise library could be loaded from YAML. "
            "Check that src/sculpt/library.yaml is present and valid."
        )
    return loaded


LIBRARY: ExerciseLibrary = _build_library()


def get_library() -> ExerciseLibrary:
    """Return the process-wide, read-only exercise library."""
    return LIBRARY

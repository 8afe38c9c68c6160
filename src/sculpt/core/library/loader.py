"""
YAML -> ExerciseLibrary loader.

Loads the catalog from the bundled ``src/sculpt/library.yaml``. If
``~/.sculpt/library.yaml`` exists it is deep-merged over the bundled data,
so only changed keys need to be listed (lists such as ``exercises`` are
replaced as a whole).

Usage (internal, called by registry.py):
    from .loader import load_library_from_yaml
    library = load_library_from_yaml()   # ExerciseLibrary or None on failure
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import DATA_DIR_NAME, LIBRARY_FILENAME
from .base import ExerciseLibrary, WorkoutTemplate


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file; warn and return {} on any read or parse error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"sculpt: ignoring unreadable library file {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _template_from_dict(d: Any) -> WorkoutTemplate:
    if not isinstance(d, dict) or "name" not in d:
        raise ValueError(f"Template must be a mapping with a 'name' key, got {d!r}")
    exercises = d.get("exercises") or []
    if not isinstance(exercises, list):
        raise ValueError(f"Template '{d['name']}': 'exercises' must be a list")
    return WorkoutTemplate(name=str(d["name"]), exercises=tuple(str(e) for e in exercises))


def library_from_dict(d: dict) -> ExerciseLibrary:
    """Convert a raw dict (from YAML) to an ExerciseLibrary.

    Raises ValueError if the catalog is missing or malformed.
    """
    exercises = d.get("exercises")
    if not isinstance(exercises, list) or not exercises:
        raise ValueError("Library must define a non-empty 'exercises' list")
    raw_templates = d.get("templates") or []
    if not isinstance(raw_templates, list):
        raise ValueError("Library 'templates' must be a list")

    return ExerciseLibrary(
        exercises=tuple(str(e) for e in exercises),
        templates=tuple(_template_from_dict(t) for t in raw_templates),
    )


def get_bundled_library_path() -> Path | None:
    """Return the path to the bundled library.yaml, or None if not found."""
    ref = importlib.resources.files("sculpt").joinpath(LIBRARY_FILENAME)
    if ref.is_file():
        return Path(str(ref))
    candidate = Path(__file__).parent.parent.parent / LIBRARY_FILENAME
    return candidate if candidate.exists() else None


def get_user_library_path() -> Path | None:
    """Return ~/.sculpt/library.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / DATA_DIR_NAME / LIBRARY_FILENAME
    return p if p.exists() else None


def load_library_from_yaml(
    bundled: Path | None = None,
    user: Path | None = None,
) -> ExerciseLibrary | None:
    """
    Load and merge the exercise library from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/sculpt/library.yaml
    2. User override at ~/.sculpt/library.yaml

    A user file that breaks the catalog is ignored with a warning.

    Returns:
        ExerciseLibrary, or None if the bundled catalog is unusable
    """
    bundled = bundled if bundled is not None else get_bundled_library_path()
    user = user if user is not None else get_user_library_path()

    if bundled is None:
        return None
    raw = _load_yaml_file(bundled)
    try:
        library = library_from_dict(raw)
    except ValueError as exc:
        warnings.warn(f"sculpt: bundled library is invalid ({exc})", stacklevel=2)
        return None

    if user is not None:
        user_raw = _load_yaml_file(user)
        if user_raw:
            try:
                library = library_from_dict(_deep_merge(raw, user_raw))
            except ValueError as exc:
                warnings.warn(
                    f"sculpt: ignoring user library {user} ({exc})",
                    stacklevel=2,
                )

    return library

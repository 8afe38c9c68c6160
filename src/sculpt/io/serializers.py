"""
JSON serialization for workout data models.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
import math
from datetime import datetime
from typing import Any

from ..core.config import UNKNOWN_MUSCLE_GROUP
from ..core.models import ExerciseRecord, Session


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a non-negative number.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value if valid

    Raises:
        ValidationError: If value is not a finite number or is negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_whole_number(value: int | float, name: str) -> int:
    """
    Validate that a value is a non-negative whole number.

    Floats are accepted only without a fractional part (3.0 -> 3).

    Raises:
        ValidationError: If value is not a finite non-negative integer
    """
    validate_non_negative(value, name)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{name} must be a whole number, got {value}")
    return int(value)


def validate_datetime(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp.

    Raises:
        ValidationError: If value is not a valid ISO timestamp string
    """
    if not isinstance(value, str):
        raise ValidationError(f"created_at must be an ISO timestamp string, got {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {value}") from e


def record_to_dict(record: ExerciseRecord) -> dict[str, Any]:
    """Convert ExerciseRecord to JSON-compatible dict."""
    return {
        "name": record.name,
        "muscle_group": record.muscle_group,
        "sets": record.sets,
        "reps": record.reps,
        "weight": record.weight,
    }


def dict_to_record(data: dict[str, Any]) -> ExerciseRecord:
    """
    Convert dict to ExerciseRecord.

    Args:
        data: Dict representation

    Returns:
        ExerciseRecord instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Entry must be an object, got {data!r}")
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid exercise name: {name!r}")

    sets = validate_whole_number(data.get("sets", 0), "sets")
    reps = validate_whole_number(data.get("reps", 0), "reps")
    weight = validate_non_negative(data.get("weight", 0.0), "weight")

    return ExerciseRecord(
        name=name,
        muscle_group=str(data.get("muscle_group") or UNKNOWN_MUSCLE_GROUP),
        sets=sets,
        reps=reps,
        weight=float(weight),
    )


def session_to_dict(session: Session) -> dict[str, Any]:
    """Convert Session to JSON-compatible dict."""
    return {
        "created_at": session.created_at.isoformat(timespec="seconds"),
        "entries": [record_to_dict(e) for e in session.entries],
    }


def dict_to_session(data: dict[str, Any]) -> Session:
    """
    Convert dict to Session.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Session must be an object, got {data!r}")
    if "created_at" not in data:
        raise ValidationError("Missing required field: created_at")
    entries = data.get("entries", [])
    if not isinstance(entries, list):
        raise ValidationError("entries must be a list")

    return Session(
        created_at=validate_datetime(data["created_at"]),
        entries=[dict_to_record(e) for e in entries],
    )


def session_to_json_line(session: Session) -> str:
    """Serialize a session to a single JSON line (no trailing newline)."""
    return json.dumps(session_to_dict(session), separators=(",", ":"))


def json_line_to_session(line: str) -> Session:
    """
    Parse one JSONL line into a Session.

    Raises:
        ValidationError: If the line is not valid JSON or not a valid session
    """
    try:
        data = json.loads(line)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    return dict_to_session(data)

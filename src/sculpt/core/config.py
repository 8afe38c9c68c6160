"""
Configuration constants for the workout logger.

All adjustable parameters are centralized here for easy tuning.
"""

from typing import Final

# =============================================================================
# STRENGTH FORMULAS
# =============================================================================

ONE_RM_REP_DIVISOR: Final[float] = 30.0  # Epley: 1RM = w * (1 + reps / 30)

# =============================================================================
# EXERCISE LIBRARY
# =============================================================================

UNKNOWN_MUSCLE_GROUP: Final[str] = "Unknown"  # Used when an entry has no "(Group)"
NO_TEMPLATE_EXERCISES: Final[str] = "No exercises defined"
SUMMARY_ELLIPSIS: Final[str] = "..."

# =============================================================================
# SESSION TIMER
# =============================================================================

TICK_INTERVAL_SECONDS: Final[float] = 1.0
TIMER_RESET_LABEL: Final[str] = "0:00"

# =============================================================================
# DISPLAY
# =============================================================================

WEIGHT_UNIT: Final[str] = "lb"

# =============================================================================
# STORAGE
# =============================================================================

DATA_DIR_NAME: Final[str] = ".sculpt"
HISTORY_FILENAME: Final[str] = "history.jsonl"
LIBRARY_FILENAME: Final[str] = "library.yaml"

"""Exceptions raised by the session-editing model."""


class InputError(ValueError):
    """Raised when user-entered values cannot be applied to a session."""

    pass


class EmptySessionError(Exception):
    """Raised when finishing a session that has no exercises."""

    def __init__(self, message: str = "Session cancelled: No exercises added.") -> None:
        super().__init__(message)

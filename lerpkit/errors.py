"""
Exceptions raised by lerpkit.

Each error also derives from the built-in exception it specialises, so code
that already catches ``TypeError`` / ``ValueError`` / ``KeyError`` keeps working.
"""


class LerpkitError(Exception):
    """Base class for all lerpkit errors."""


class MissingOperationError(LerpkitError, TypeError):
    """An arithmetic operation needed for interpolation is absent or not callable."""

    def __init__(self, operation: str, owner: object = None, detail: str | None = None):
        self.operation = operation
        self.owner = owner
        message = f"No {operation} operation"
        if owner is not None:
            name = owner.__name__ if isinstance(owner, type) else repr(owner)
            message += f" found on {name}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class InvalidDurationError(LerpkitError, ValueError):
    """Duration is not a finite number."""


class UnknownCurveError(LerpkitError, KeyError):
    """No easing curve is registered under the requested name."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""

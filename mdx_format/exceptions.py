"""Package-specific exception types."""

from __future__ import annotations


class FormatError(ValueError):
    """Base class for formatting-related errors."""


class InvalidOptionsError(FormatError):
    """Raised when indentation options cannot produce an indent unit.

    Args:
        name: Name of the offending option.
        value: Value that was rejected.
        expected: What a valid value looks like.
    """

    def __init__(self, name: str, value: object, expected: str = "a positive integer"):
        self.name = name
        self.value = value
        super().__init__(f"`{name}` must be {expected}, got {value!r}")


class FormatFailedError(FormatError):
    """Raised when a formatting pass was abandoned.

    Args:
        reason: Description of the internal failure.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"MDX formatter error: {reason}")

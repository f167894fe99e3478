from __future__ import annotations

from typing import Any


class DecodeError(ValueError):
    """Base class for every failure to turn an incoming event into a Detail."""


class JSONSyntaxError(DecodeError):
    """The payload is not well-formed JSON (or not valid UTF-8)."""


class SchemaMismatchError(DecodeError):
    """A JSON value does not have the shape its field requires."""

    def __init__(self, field: str, expected: str, value: Any) -> None:
        self.field = field
        self.expected = expected
        self.value = value
        super().__init__(
            f"field {field!r}: expected {expected}, got {type(value).__name__} {value!r}"
        )


class MalformedTimestampError(DecodeError):
    """A timestamp string does not follow the provider's date grammar."""

    def __init__(self, field: str, value: str, reason: str = "") -> None:
        self.field = field
        self.value = value
        message = f"field {field!r}: malformed timestamp {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EnvelopeError(DecodeError):
    """The envelope has no usable ``detail`` payload."""

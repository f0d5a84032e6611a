"""Errors raised by the record pipeline."""


class RecordBenchError(Exception):
    """Base error for this package."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(RecordBenchError):
    """Raised when a record breaks a domain rule."""


class MalformedRowError(RecordBenchError):
    """Raised when a text line cannot be split into record fields."""


class DecodeError(RecordBenchError):
    """Raised when a byte buffer is not a valid binary record encoding."""

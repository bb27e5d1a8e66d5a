"""Exceptions raised by settlebench."""

from __future__ import annotations


class SettlebenchError(Exception):
    """Base class for all settlebench errors."""


class InvalidInputError(SettlebenchError, ValueError):
    """Raised when a statistical routine receives arguments it cannot handle."""


class RecordParseError(SettlebenchError, ValueError):
    """Raised when a benchmark record cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)

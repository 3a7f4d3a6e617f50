"""Exceptions for icaltree library."""

from __future__ import annotations


class CalendarError(Exception):
    """Base exception for all icaltree errors."""


class CalendarParseError(CalendarError):
    """Exception raised when parsing an ics stream.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the offending content line, useful
    for debugging purposes. The 'line_number' is the physical line in the
    input where the content line started, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        detailed_error: str | None = None,
        line_number: int | None = None,
    ) -> None:
        """Initialize the CalendarParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class MalformedContentLine(CalendarParseError):
    """A single content line could not be split into name, parameters and value.

    This is a local error: the parser may skip the line and continue.
    """


class LineTooLong(CalendarParseError):
    """A logical (unfolded) line exceeded the configured maximum length."""


class PropertyOutsideComponent(CalendarParseError):
    """A property was found before any BEGIN or after the last END."""


class UnbalancedEnd(CalendarParseError):
    """An END marker was found while no component was open."""


class MismatchedEnd(CalendarParseError):
    """An END marker does not name the open component (strict mode only)."""


class UnterminatedComponent(CalendarParseError):
    """The stream ended while one or more components were still open."""


class NestingTooDeep(CalendarParseError):
    """A BEGIN marker would exceed the configured maximum nesting depth."""

from __future__ import annotations


class CalendarError(Exception):
    """Base exception for all calendar-related errors."""


class InvalidDateError(CalendarError, TypeError):
    """Raised when an operation receives something that is not a calendar date."""

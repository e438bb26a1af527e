"""Validation of user-entered date ranges.

Problems are returned as a :class:`ValidationResult` the caller can show to
the user; nothing here raises for bad input.
"""

from __future__ import annotations

import datetime
import enum
from typing import NamedTuple


class DateRangeError(enum.Enum):
    MISSING = "Please choose both a start and an end date."
    UNPARSEABLE = "Invalid date. Use YYYY-MM-DD."
    START_AFTER_END = "The start date must be on or before the end date."
    IN_PAST = "The start date must be today or later."
    OUTSIDE_YEAR = "Both dates must fall within {year}."


class ValidationResult(NamedTuple):
    valid: bool
    error: DateRangeError | None = None
    message: str = ""


_OK = ValidationResult(valid=True)


def _fail(error: DateRangeError, **fields: object) -> ValidationResult:
    return ValidationResult(valid=False, error=error, message=error.value.format(**fields))


def _parse(value: str | datetime.date) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(value.strip())


def parse_date_range(
    start: str | datetime.date | None,
    end: str | datetime.date | None,
) -> tuple[datetime.date, datetime.date] | ValidationResult:
    """Parse both ends, or return the failure."""
    if not start or not end:
        return _fail(DateRangeError.MISSING)
    try:
        start_date, end_date = _parse(start), _parse(end)
    except ValueError:
        return _fail(DateRangeError.UNPARSEABLE)
    return start_date, end_date


def validate_date_range(
    start: str | datetime.date | None,
    end: str | datetime.date | None,
    year: int,
    today: datetime.date,
) -> ValidationResult:
    """Check a range for a custom leave period in *year*.

    Checks run in order: both given, both parseable, start <= end, start not
    before *today*, both inside *year*.
    """
    parsed = parse_date_range(start, end)
    if isinstance(parsed, ValidationResult):
        return parsed
    start_date, end_date = parsed

    if start_date > end_date:
        return _fail(DateRangeError.START_AFTER_END)
    if start_date < today:
        return _fail(DateRangeError.IN_PAST)
    if start_date < datetime.date(year, 1, 1) or end_date > datetime.date(year, 12, 31):
        return _fail(DateRangeError.OUTSIDE_YEAR, year=year)
    return _OK

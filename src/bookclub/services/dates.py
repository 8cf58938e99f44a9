"""Parsing helpers for schedule months and meeting dates."""
from __future__ import annotations

import re
from datetime import date, datetime

from bookclub.core.errors import ValidationError
from bookclub.models.book import READ_ON_TBD

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_month(value: str) -> bool:
    """Return True for a real calendar month written as ``YYYY-MM``."""
    if not MONTH_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m")
    except ValueError:
        return False
    return True


def is_exact_date(value: str) -> bool:
    """Return True for a real calendar date written as ``YYYY-MM-DD``."""
    if not DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_month(value: str) -> str:
    if not is_month(value):
        raise ValidationError("Invalid month format. Use YYYY-MM")
    return value


def validate_schedule_date(value: str | None, *, allow_tbd: bool = False) -> str:
    """Validate a book schedule value.

    Args:
        value: ``YYYY-MM`` or ``YYYY-MM-DD`` (or ``TBD`` when ``allow_tbd``)
        allow_tbd: Whether the ``TBD`` placeholder is acceptable

    Raises:
        ValidationError: If the value is missing or malformed.
    """
    if not value:
        raise ValidationError("Scheduled date is required")
    if allow_tbd and value == READ_ON_TBD:
        return value
    if is_month(value) or is_exact_date(value):
        return value
    raise ValidationError("Invalid date format. Use YYYY-MM or YYYY-MM-DD")


def validate_meeting_date(value: object) -> str:
    if not isinstance(value, str) or not is_exact_date(value):
        raise ValidationError(f"Invalid meeting date: {value!r}. Use YYYY-MM-DD")
    return value

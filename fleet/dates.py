"""Date parsing helpers shared by the classifiers and calculators."""

import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse

from .errors import ValidationError

DateLike = Union[date, str]

ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Parse an ISO-8601 ``YYYY-MM-DD`` value into a date.

    ``None`` and empty strings pass through as ``None``. Datetimes and
    timestamp strings (``YYYY-MM-DDTHH:MM...``) are truncated to their date.
    Anything else that is not a valid calendar date raises ValidationError
    instead of producing a value that silently compares false.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")

    text = value.strip()
    if not text:
        return None
    day, sep, _ = text.partition("T")
    if not ISO_DATE.match(day):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    try:
        if sep:
            # Timestamps from the store; the whole value must parse
            return isoparse(text).date()
        return date.fromisoformat(day)
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def require_date(value: Optional[DateLike], field: str = "date") -> date:
    """Parse a date that must be present."""
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError(f"Missing {field}")
    return parsed

# backend/core/validation.py

"""
Shared input validation helpers for request schemas.
"""

import re
from datetime import date
from typing import Annotated, Any

from pydantic import BeforeValidator

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_date_format(value: str) -> bool:
    """Return True if ``value`` is a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _require_iso_date_string(value: Any) -> Any:
    if isinstance(value, date):
        return value
    if not is_valid_date_format(value):
        raise ValueError("Invalid date format. Use YYYY-MM-DD.")
    return value


# Calendar date accepted only as a "YYYY-MM-DD" string (or a date object)
IsoDate = Annotated[date, BeforeValidator(_require_iso_date_string)]

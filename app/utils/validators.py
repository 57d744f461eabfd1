"""Validation helpers for Shelfkeep."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Tuple

TOKEN_NAME_MAX_LENGTH = 250
DATE_FORMAT = '%Y-%m-%d'


def validate_token_name(name: Any) -> Tuple[bool, str]:
    """Validate an API token display name."""
    if name is None or name == '':
        return False, "The name field is required"
    if not isinstance(name, str):
        return False, "The name must be a string"
    if not name.strip():
        return False, "The name field is required"
    if len(name) > TOKEN_NAME_MAX_LENGTH:
        return False, f"The name may not be greater than {TOKEN_NAME_MAX_LENGTH} characters"
    return True, ""


def validate_date(value: Any) -> Tuple[bool, str]:
    """Validate a calendar date in strict YYYY-MM-DD form."""
    if not isinstance(value, str) or not re.match(r'^\d{4}-\d{2}-\d{2}$', value):
        return False, "The date must match the format YYYY-MM-DD"
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False, "The date is not a valid calendar date"
    return True, ""


def add_years(start: date, years: int) -> date:
    """Shift a date by whole years, clamping Feb 29 to Feb 28."""
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return start.replace(year=start.year + years, day=28)


def sanitize_string(value: str, max_length: int = 255) -> str:
    """Sanitize string input."""
    if not value:
        return ""
    value = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', str(value))
    return value[:max_length].strip()

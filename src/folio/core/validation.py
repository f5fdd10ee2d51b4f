"""Field validation helpers used by the mutation path.

Each helper returns a sentinel failure value (``None`` or ``False``) instead
of raising, so callers decide which error to report.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Final

DATE_FORMAT: Final[str] = "%m/%d/%Y"

# US states, DC and the inhabited territories
REGION_CODES: Final[frozenset[str]] = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
        "DC", "AS", "GU", "MP", "PR", "VI",
    }
)  # fmt: skip

_ISBN_SEPARATORS = re.compile(r"[\s-]")
_ISBN10 = re.compile(r"[0-9]{9}[0-9X]")
_ISBN13 = re.compile(r"[0-9]{13}")


def is_non_blank(value: str | None) -> bool:
    """True when value is a string with at least one non-whitespace char."""
    return isinstance(value, str) and bool(value.strip())


def is_valid_date(value: str | None) -> date | None:
    """Parse a MM/DD/YYYY string into a date, or None when invalid."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def is_valid_date_of_birth(value: str | None, today: date | None = None) -> date | None:
    """Parse a date of birth; dates in the future are rejected."""
    parsed = is_valid_date(value)
    if parsed is None:
        return None
    if parsed > (today or date.today()):
        return None
    return parsed


def is_valid_region_code(value: str | None) -> bool:
    """True for a two-letter US state or territory code (any case)."""
    if not isinstance(value, str) or len(value) != 2:
        return False
    return value.upper() in REGION_CODES


def is_valid_isbn(value: str | None) -> bool:
    """Validate an ISBN-10 or ISBN-13 checksum. Hyphens and spaces are ignored."""
    if not isinstance(value, str) or not value.strip():
        return False
    digits = _ISBN_SEPARATORS.sub("", value).upper()

    if _ISBN10.fullmatch(digits):
        total = sum((10 - i) * int(ch) for i, ch in enumerate(digits[:9]))
        total += 10 if digits[9] == "X" else int(digits[9])
        return total % 11 == 0

    if _ISBN13.fullmatch(digits):
        total = sum(int(ch) * (1 if i % 2 == 0 else 3) for i, ch in enumerate(digits))
        return total % 10 == 0

    return False

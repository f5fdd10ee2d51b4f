"""Argument checks shared by the read and mutation paths.

Each check raises ``BadInputError`` and never touches the store or cache.
"""

from __future__ import annotations

import math
from datetime import date

from folio.core.errors import BadInputError
from folio.core.ids import is_valid_identity
from folio.core.validation import (
    is_non_blank,
    is_valid_date,
    is_valid_date_of_birth,
    is_valid_isbn,
    is_valid_region_code,
)


def require_identity(value: str | None) -> str:
    """Identity used for a cache-aside read: non-blank and a canonical UUID."""
    if value is None or not value.strip():
        raise BadInputError("id cannot be empty")
    if not is_valid_identity(value):
        raise BadInputError("Invalid uuid")
    return value


def require_present(value: str | None, label: str = "id") -> str:
    if value is None or not value.strip():
        raise BadInputError(f"{label} cannot be empty")
    return value


def require_text(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise BadInputError(message)
    return value


def require_labels(values: list[str] | None, label: str) -> list[str]:
    """Non-empty list without blank entries; entries come back trimmed."""
    if not values:
        raise BadInputError(f"{label} cannot be empty")
    if any(not is_non_blank(item) for item in values):
        raise BadInputError(f"{label} cannot contain empty values")
    return [item.strip() for item in values]


def require_date(value: str | None, label: str) -> date:
    parsed = is_valid_date(value)
    if parsed is None:
        raise BadInputError(f"Invalid {label}")
    return parsed


def require_date_of_birth(value: str | None) -> date:
    parsed = is_valid_date_of_birth(value)
    if parsed is None:
        raise BadInputError("Date of birth must be a valid past date in MM/DD/YYYY format")
    return parsed


def require_region(value: str | None) -> str:
    """Two-letter region code, returned upper-cased."""
    if value is None or not is_valid_region_code(value):
        raise BadInputError(
            "Hometown state must be a valid two-letter abbreviation (e.g., 'NJ')"
        )
    return value.upper()


def require_positive(value: float | None, label: str) -> float:
    if value is None or isinstance(value, bool) or not math.isfinite(value) or value <= 0:
        raise BadInputError(f"{label} must be greater than 0")
    return value


def require_count(value: float | None, label: str) -> int:
    """Positive whole number; ``5.0`` is accepted, ``2.5`` is not."""
    value = require_positive(value, label)
    if not float(value).is_integer():
        raise BadInputError(f"{label} must be a whole number")
    return int(value)


def require_isbn(value: str | None) -> str:
    if value is None or not is_valid_isbn(value):
        raise BadInputError("Invalid ISBN")
    return value


def require_price_range(min_price: float, max_price: float) -> None:
    if not (math.isfinite(min_price) and math.isfinite(max_price)):
        raise BadInputError("Invalid price range")
    if min_price < 0 or max_price <= min_price:
        raise BadInputError("Invalid price range")


def require_published_after(published: date, date_of_birth: str) -> None:
    """Publication date must be strictly later than the author's birth date."""
    born = is_valid_date(date_of_birth)
    if born is None or published <= born:
        raise BadInputError("Publication date must be later than the author's date of birth")

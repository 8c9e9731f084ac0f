"""Date Validation — pure check of the optional APOD date path parameter.

Invariants:
    - Absent date is valid and means "today"
    - Rules short-circuit in order: format, future, before first APOD
    - Pattern check only; calendar validity (2024-02-30) is left to upstream
    - Pure: caller supplies today, no clock access here
"""

import re
from datetime import date

from apod_explorer.core.errors import DateValidationError

FIRST_APOD_DATE = date(1995, 6, 16)

# [0-9] rather than \d: \d also matches non-ASCII digits
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def validate_apod_date(
    value: str | None, today: date,
) -> DateValidationError | None:
    """Return a DateValidationError for the first failing rule, else None."""
    if value is None:
        return None

    if not _DATE_PATTERN.fullmatch(value):
        return DateValidationError(
            "Invalid date format. Please use YYYY-MM-DD format.",
        )

    # YYYY-MM-DD strings sort in calendar order, even calendar-invalid ones
    if value > today.isoformat():
        return DateValidationError("Date cannot be in the future.")

    if value < FIRST_APOD_DATE.isoformat():
        return DateValidationError(
            "Date must be on or after June 16, 1995 (APOD start date).",
        )

    return None

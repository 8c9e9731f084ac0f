"""Date Validation — tests for the pure APOD date checks.

Tests cover:
    - Absent date is accepted
    - Malformed strings rejected with VALIDATION_ERROR/400 on field "date"
    - Boundary at the first APOD date (1995-06-16)
    - Future dates rejected, today accepted
    - Calendar-invalid but well-formed dates pass through
    - First failing rule wins
"""

from datetime import date

import pytest

from apod_explorer.core.date_validation import FIRST_APOD_DATE, validate_apod_date
from apod_explorer.core.errors import DateValidationError, ErrorType

TODAY = date(2024, 3, 1)


def test_absent_date_is_valid():
    assert validate_apod_date(None, TODAY) is None


@pytest.mark.parametrize("value", [
    "", "today", "2024-1-15", "24-01-15", "2024/01/15", "20240115",
    "2024-01-15T00:00", " 2024-01-15", "2024-01-15\n", "２０２４-01-15",
])
def test_malformed_date_rejected(value):
    error = validate_apod_date(value, TODAY)
    assert isinstance(error, DateValidationError)
    assert error.error_type == ErrorType.VALIDATION
    assert error.http_status == 400
    assert error.field == "date"
    assert "YYYY-MM-DD" in error.message


def test_day_before_first_apod_rejected():
    error = validate_apod_date("1995-06-15", TODAY)
    assert error is not None
    assert error.http_status == 400
    assert "June 16, 1995" in error.message


def test_first_apod_date_accepted():
    assert validate_apod_date(FIRST_APOD_DATE.isoformat(), TODAY) is None
    assert FIRST_APOD_DATE == date(1995, 6, 16)


def test_future_date_rejected():
    error = validate_apod_date("2024-03-02", TODAY)
    assert error is not None
    assert error.message == "Date cannot be in the future."
    assert error.field == "date"


def test_today_accepted():
    assert validate_apod_date("2024-03-01", TODAY) is None


def test_calendar_invalid_date_passes_through():
    assert validate_apod_date("2024-02-30", TODAY) is None
    assert validate_apod_date("2023-13-01", TODAY) is None


def test_format_rule_wins_over_range_rules():
    error = validate_apod_date("1990-1-1", TODAY)
    assert "YYYY-MM-DD" in error.message


def test_error_converts_to_error_info():
    info = validate_apod_date("bad", TODAY).to_error_info()
    assert info.type == "VALIDATION_ERROR"
    assert info.status == 400
    assert info.field == "date"

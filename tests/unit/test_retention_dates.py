# tests/unit/test_retention_dates.py
"""
Unit tests for the retention date helpers.

Calendar month arithmetic, date parsing of stored values, month offsets.
"""

import pytest
from datetime import date, datetime, timezone


# =============================================================================
# CALENDAR MONTHS
# =============================================================================

class TestAddCalendarMonths:
    """Tests for add_calendar_months."""

    def test_clamps_to_leap_day(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_clamps_to_end_of_february(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_clamps_to_thirty_day_month(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2024, 3, 31), 1) == date(2024, 4, 30)

    def test_keeps_day_of_month(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2023, 1, 15), 12) == date(2024, 1, 15)
        assert add_calendar_months(date(2024, 1, 1), 6) == date(2024, 7, 1)

    def test_crosses_year_boundary(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2023, 11, 30), 3) == date(2024, 2, 29)

    def test_zero_months_is_identity(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2024, 5, 17), 0) == date(2024, 5, 17)

    def test_leap_day_plus_year(self):
        from dossier.services.retention.dates import add_calendar_months

        assert add_calendar_months(date(2024, 2, 29), 12) == date(2025, 2, 28)


# =============================================================================
# PARSING
# =============================================================================

class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize("value,expected", [
        ("2024-01-15", date(2024, 1, 15)),
        ("  2024-01-15 ", date(2024, 1, 15)),
        ("2024-01-15T23:30:00Z", date(2024, 1, 15)),
        ("2024-01-15T08:00:00+02:00", date(2024, 1, 15)),
        ("2024-01-15T08:00:00.123456+00:00", date(2024, 1, 15)),
        ("2024-01-15 08:00:00", date(2024, 1, 15)),
    ])
    def test_parses_iso_strings(self, value, expected):
        from dossier.services.retention.dates import parse_date

        assert parse_date(value) == expected

    def test_accepts_date_and_datetime(self):
        from dossier.services.retention.dates import parse_date

        assert parse_date(date(2024, 1, 15)) == date(2024, 1, 15)
        assert parse_date(datetime(2024, 1, 15, 23, 59, tzinfo=timezone.utc)) == date(2024, 1, 15)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2024-13-01", "15.01.2024"])
    def test_missing_or_unparseable_is_none(self, value):
        from dossier.services.retention.dates import parse_date

        assert parse_date(value) is None


class TestParseMonths:
    """Tests for parse_months."""

    @pytest.mark.parametrize("value,expected", [
        (12, 12),
        (0, 0),
        ("6", 6),
        (" 24 ", 24),
        (6.0, 6),
        (6.9, 6),
    ])
    def test_valid_offsets(self, value, expected):
        from dossier.services.retention.dates import parse_months

        assert parse_months(value) == expected

    @pytest.mark.parametrize("value", [
        None, "", "abc", -1, "-3", float("nan"), float("inf"), True, False,
    ])
    def test_invalid_offsets(self, value):
        from dossier.services.retention.dates import parse_months

        assert parse_months(value) is None


# =============================================================================
# SMALL HELPERS
# =============================================================================

class TestHelpers:
    """Tests for normalize, is_expired, to_iso_date and chunked."""

    def test_normalize(self):
        from dossier.services.retention.dates import normalize

        assert normalize(None) == ""
        assert normalize("  started ") == "started"
        assert normalize(12) == "12"

    def test_is_expired_is_strict(self):
        from dossier.services.retention.dates import is_expired

        today = date(2024, 6, 1)
        assert is_expired(date(2024, 5, 31), today) is True
        assert is_expired(date(2024, 6, 1), today) is False
        assert is_expired(date(2024, 6, 2), today) is False

    def test_to_iso_date(self):
        from dossier.services.retention.dates import to_iso_date

        assert to_iso_date(date(2024, 2, 9)) == "2024-02-09"

    def test_chunked_splits_in_order(self):
        from dossier.services.retention.dates import chunked

        chunks = list(chunked(list(range(1200)), 500))
        assert [len(c) for c in chunks] == [500, 500, 200]
        assert chunks[0][0] == 0
        assert chunks[-1][-1] == 1199

    def test_chunked_empty(self):
        from dossier.services.retention.dates import chunked

        assert list(chunked([], 500)) == []

    def test_chunked_rejects_non_positive_size(self):
        from dossier.services.retention.dates import chunked

        with pytest.raises(ValueError):
            list(chunked([1, 2], 0))

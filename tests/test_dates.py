"""
Tests for date normalization.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from invoice_stats.reports.dates import normalize_date


class TestNormalizeDate:
    """Each parsing strategy and the failure marker."""
    
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2026-10-19", date(2026, 10, 19)),
            ("2026-10-19T08:30:00", date(2026, 10, 19)),
            ("2026-10-19T23:30:00.000Z", date(2026, 10, 19)),
            ("19 Oct 2026", date(2026, 10, 19)),
            ("October 19, 2026", date(2026, 10, 19)),
        ],
    )
    def test_native_formats(self, raw, expected):
        assert normalize_date(raw) == expected
    
    def test_offset_is_converted_to_utc_before_taking_the_date(self):
        """01:00 at +04:00 is still the previous day in UTC."""
        assert normalize_date("2026-10-19T01:00:00+04:00") == date(2026, 10, 18)
    
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("19-10-2026", date(2026, 10, 19)),
            ("19/10/2026", date(2026, 10, 19)),
            ("05/04/2026", date(2026, 4, 5)),
            ("1/2/2026", date(2026, 2, 1)),
        ],
    )
    def test_day_first_formats(self, raw, expected):
        assert normalize_date(raw) == expected
    
    def test_year_first_with_slashes(self):
        assert normalize_date("2026/10/19") == date(2026, 10, 19)
        assert normalize_date("2026/1/9") == date(2026, 1, 9)
    
    def test_surrounding_whitespace_is_ignored(self):
        assert normalize_date("  2026-10-19 ") == date(2026, 10, 19)
    
    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            None,
            "not a date",
            "32/01/2026",
            "31-02-2026",
            "2026-13-01",
            "2026/02/30",
            "10/19",
            "tomorrow",
            "N/A",
        ],
    )
    def test_malformed_values_return_none(self, raw):
        assert normalize_date(raw) is None
    
    def test_date_and_datetime_objects_pass_through(self):
        assert normalize_date(date(2026, 3, 1)) == date(2026, 3, 1)
        aware = datetime(2026, 3, 1, 2, 0, tzinfo=timezone(timedelta(hours=5)))
        assert normalize_date(aware) == date(2026, 2, 28)

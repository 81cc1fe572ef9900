"""
Unit tests for the period service.

Tests period enumeration:
1. Available weeks (distinct keys, current week always present)
2. Month range generation (calendar and 13-month)
3. Available months and month lookup
"""

import pytest
from datetime import date, datetime, timedelta

from models.settings import CalendarSettings
from services.period_service import (
    find_month_index,
    find_month_range,
    generate_month_ranges,
    get_available_months,
    get_available_weeks,
)
from tests.factories import RecordFactory


# ===================
# TEST 1: AVAILABLE WEEKS
# ===================

class TestAvailableWeeks:
    """Tests for get_available_weeks."""

    def test_distinct_weeks_sorted_descending(self, calibrated_settings, today):
        records = [
            RecordFactory.create(timestamp="2025-01-08"),
            RecordFactory.create(timestamp="2025-01-09"),
            RecordFactory.create(timestamp="2025-01-13"),
        ]

        weeks = get_available_weeks(records, calibrated_settings, today=today)

        assert [w.key for w in weeks] == ["2025-W3", "2025-W2", "2025-W1"]

    def test_week_descriptor(self, calibrated_settings, today):
        weeks = get_available_weeks(
            [RecordFactory.create(timestamp="2025-01-13")], calibrated_settings, today=today
        )
        week = next(w for w in weeks if w.week == 2)

        assert week.year == 2025
        assert week.start == date(2025, 1, 12)
        assert week.end == date(2025, 1, 18)
        assert week.label == "Week 2 (Jan 12 - Jan 18)"

    def test_current_week_always_present(self, calibrated_settings, today):
        weeks = get_available_weeks([], calibrated_settings, today=today)

        assert len(weeks) == 1
        assert weeks[0].key == "2025-W3"
        assert weeks[0].start == date(2025, 1, 19)

    def test_current_week_not_duplicated(self, calibrated_settings, today):
        records = RecordFactory.create_batch(3, timestamp="2025-01-21")

        weeks = get_available_weeks(records, calibrated_settings, today=today)

        assert [w.key for w in weeks] == ["2025-W3"]

    def test_records_without_timestamp_skipped(self, calibrated_settings, today):
        records = [RecordFactory.create(timestamp=None), RecordFactory.create(timestamp="junk")]

        weeks = get_available_weeks(records, calibrated_settings, today=today)

        assert [w.key for w in weeks] == ["2025-W3"]

    def test_week_spanning_new_year_uses_start_year(self, calibrated_settings, today):
        records = [RecordFactory.create(timestamp="2025-01-02")]

        weeks = get_available_weeks(records, calibrated_settings, today=today)
        last = weeks[-1]

        assert (last.year, last.week) == (2024, 52)
        assert last.start == date(2024, 12, 29)
        assert last.end == date(2025, 1, 4)

    def test_sorted_across_years(self, calibrated_settings, today):
        records = [
            RecordFactory.create(timestamp="2024-12-30"),
            RecordFactory.create(timestamp="2025-01-06"),
        ]

        weeks = get_available_weeks(records, calibrated_settings, today=today)

        assert [w.key for w in weeks] == ["2025-W3", "2025-W1", "2024-W52"]


# ===================
# TEST 2: MONTH RANGES
# ===================

class TestGenerateMonthRanges:
    """Tests for generate_month_ranges."""

    def test_calendar_months(self, plain_settings):
        ranges = generate_month_ranges(plain_settings, 2025)

        assert len(ranges) == 12
        assert ranges[0].index == 1
        assert ranges[0].start == date(2025, 1, 1)
        assert ranges[0].end == date(2025, 1, 31)
        assert ranges[0].label == "January (Jan 1 - Jan 31)"
        assert ranges[0].short_label == "Jan"
        assert ranges[0].key == "Month-1"
        assert ranges[1].end == date(2025, 2, 28)
        assert ranges[-1].end == date(2025, 12, 31)

    def test_calendar_months_leap_year(self, plain_settings):
        ranges = generate_month_ranges(plain_settings, 2024)
        assert ranges[1].end == date(2024, 2, 29)

    def test_thirteen_month_year(self, month_calibrated_settings):
        ranges = generate_month_ranges(month_calibrated_settings, 2025)

        assert len(ranges) == 13
        assert (ranges[0].start, ranges[0].end) == (date(2025, 1, 5), date(2025, 2, 1))
        assert (ranges[1].start, ranges[1].end) == (date(2025, 2, 2), date(2025, 3, 1))
        assert (ranges[12].start, ranges[12].end) == (date(2025, 12, 7), date(2026, 1, 3))
        assert ranges[12].short_label == "M13"
        assert ranges[12].label == "Month 13 (Dec 7 - Jan 3)"

    def test_thirteen_month_year_is_contiguous(self, month_calibrated_settings):
        ranges = generate_month_ranges(month_calibrated_settings, 2025)

        for previous, current in zip(ranges, ranges[1:]):
            assert current.start == previous.end + timedelta(days=1)
            assert (current.end - current.start).days == 27

    def test_incomplete_month_calibration_uses_calendar(self):
        settings = CalendarSettings.from_raw({"month1StartDate": "2025-01-05"})

        ranges = generate_month_ranges(settings, 2025)

        assert len(ranges) == 12
        assert ranges[0].start == date(2025, 1, 1)


# ===================
# TEST 3: AVAILABLE MONTHS & LOOKUP
# ===================

class TestAvailableMonths:
    """Tests for get_available_months, find_month_range and find_month_index."""

    def test_lists_every_range_descending(self, calendar_months_2025):
        months = get_available_months(calendar_months_2025)

        assert len(months) == 12
        assert months[0].month == 12
        assert months[0].key == "Month-12"
        assert months[-1].month == 1
        assert months[-1].start == date(2025, 1, 1)

    def test_empty_ranges(self):
        assert get_available_months([]) == []

    def test_find_range(self, calendar_months_2025):
        assert find_month_range(3, calendar_months_2025).start == date(2025, 3, 1)
        assert find_month_range(13, calendar_months_2025) is None

    @pytest.mark.parametrize("value,expected", [
        (datetime(2025, 3, 15, 10, 0), 3),
        ("2025-01-31T23:59:59", 1),
        (date(2025, 2, 1), 2),
        (date(2026, 1, 1), None),
        (None, None),
    ])
    def test_find_index(self, calendar_months_2025, value, expected):
        assert find_month_index(value, calendar_months_2025) == expected

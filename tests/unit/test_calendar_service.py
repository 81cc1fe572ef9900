"""
Unit tests for the calendar service.

Tests custom week numbering:
1. Calibrated numbering (inside, after, before the week-1 interval)
2. Uncalibrated annual numbering
3. Week keys across the New Year boundary
4. Inverse lookup and calendar listing
"""

import pytest
from datetime import date, datetime, timedelta

from models.period import WeekKey
from models.settings import CalendarSettings
from services.calendar_service import (
    end_of_week,
    get_current_week_number,
    get_custom_week_number,
    get_week_key,
    get_week_start_date,
    list_calendar_weeks,
    start_of_week,
)


# ===================
# TEST 1: WEEK BOUNDS
# ===================

class TestWeekBounds:
    """Tests for start_of_week / end_of_week."""

    def test_sunday_start(self):
        """Wednesday Jan 8 belongs to the week starting Sunday Jan 5."""
        assert start_of_week(date(2025, 1, 8), 0) == date(2025, 1, 5)
        assert end_of_week(date(2025, 1, 8), 0) == date(2025, 1, 11)

    def test_monday_start(self):
        assert start_of_week(date(2025, 1, 8), 1) == date(2025, 1, 6)
        assert end_of_week(date(2025, 1, 8), 1) == date(2025, 1, 12)

    def test_start_day_is_its_own_week_start(self):
        assert start_of_week(date(2025, 1, 5), 0) == date(2025, 1, 5)

    def test_accepts_strings_and_datetimes(self):
        assert start_of_week("2025-01-08T22:00:00Z", 0) == date(2025, 1, 5)
        assert start_of_week(datetime(2025, 1, 8, 23, 59), 0) == date(2025, 1, 5)

    def test_unreadable_value(self):
        assert start_of_week(None, 0) is None
        assert end_of_week("garbage", 0) is None


# ===================
# TEST 2: CALIBRATED NUMBERING
# ===================

class TestCalibratedWeekNumber:
    """
    Tests for get_custom_week_number with a week-1 calibration.

    Calibration: Sunday weeks, week 1 = 2025-01-05 .. 2025-01-11.
    """

    def test_inside_calibration_interval(self, calibrated_settings):
        assert get_custom_week_number("2025-01-08", 2025, calibrated_settings) == 1

    def test_every_day_of_interval_is_start_week(self, calibrated_settings):
        day = date(2025, 1, 5)
        while day <= date(2025, 1, 11):
            assert get_custom_week_number(day, 2025, calibrated_settings) == 1
            day += timedelta(days=1)

    def test_last_day_late_evening_stays_in_calibration_week(self, calibrated_settings):
        """Time of day is ignored at the week1_end boundary."""
        assert get_custom_week_number(datetime(2025, 1, 11, 23, 59, 59), 2025, calibrated_settings) == 1
        assert get_custom_week_number("2025-01-11T23:30:00Z", 2025, calibrated_settings) == 1

    def test_first_sunday_after_calibration_is_week_2(self, calibrated_settings):
        assert get_custom_week_number("2025-01-12", 2025, calibrated_settings) == 2

    def test_following_weeks(self, calibrated_settings):
        assert get_custom_week_number("2025-01-18", 2025, calibrated_settings) == 2
        assert get_custom_week_number("2025-01-19", 2025, calibrated_settings) == 3
        assert get_custom_week_number("2025-12-28", 2025, calibrated_settings) == 52

    def test_week_before_calibration_wraps_to_52(self, calibrated_settings):
        """1 - ceil(7 / 7) = 0, wrapped by +52."""
        assert get_custom_week_number("2024-12-29", 2024, calibrated_settings) == 52

    def test_partial_week_before_calibration(self, calibrated_settings):
        """Dec 30 is 6 days before Jan 5: ceil(6 / 7) = 1 -> 52."""
        assert get_custom_week_number("2024-12-30", 2024, calibrated_settings) == 52

    def test_two_weeks_before_calibration(self, calibrated_settings):
        assert get_custom_week_number("2024-12-22", 2024, calibrated_settings) == 51

    def test_reference_year_is_ignored_when_calibrated(self, calibrated_settings):
        assert get_custom_week_number("2025-01-12", 1999, calibrated_settings) == 2

    def test_custom_start_week_number(self):
        settings = CalendarSettings.from_raw({
            "weekStartDay": 0,
            "week1StartDate": "2025-01-05",
            "week1EndDate": "2025-01-11",
            "startWeekNumber": 10,
        })
        assert get_custom_week_number("2025-01-08", 2025, settings) == 10
        assert get_custom_week_number("2025-01-12", 2025, settings) == 11
        assert get_custom_week_number("2024-12-29", 2024, settings) == 9

    def test_short_calibration_interval_ending_mid_week(self):
        """Days between week1_end and the next week start stay in week 1."""
        settings = CalendarSettings.from_raw({
            "weekStartDay": 0,
            "week1StartDate": "2025-01-05",
            "week1EndDate": "2025-01-08",
        })
        assert get_custom_week_number("2025-01-10", 2025, settings) == 1
        assert get_custom_week_number("2025-01-11", 2025, settings) == 1
        assert get_custom_week_number("2025-01-12", 2025, settings) == 2

    def test_long_calibration_interval(self):
        """An 11-day anchor is still a single week."""
        settings = CalendarSettings.from_raw({
            "weekStartDay": 0,
            "week1StartDate": "2025-01-01",
            "week1EndDate": "2025-01-11",
        })
        assert get_custom_week_number("2025-01-01", 2025, settings) == 1
        assert get_custom_week_number("2025-01-11", 2025, settings) == 1
        assert get_custom_week_number("2025-01-12", 2025, settings) == 2

    def test_far_before_calibration_stays_positive(self, calibrated_settings):
        day = date(2023, 1, 1)
        while day < date(2025, 1, 5):
            assert get_custom_week_number(day, day.year, calibrated_settings) >= 1
            day += timedelta(days=3)


# ===================
# TEST 3: UNCALIBRATED NUMBERING
# ===================

class TestUncalibratedWeekNumber:
    """
    Tests for the annual fallback.

    2025 starts on a Wednesday; the first Sunday is Jan 5.
    """

    def test_days_before_first_week_start_are_week_0(self, plain_settings):
        assert get_custom_week_number("2025-01-01", 2025, plain_settings) == 0
        assert get_custom_week_number("2025-01-04", 2025, plain_settings) == 0

    def test_first_week(self, plain_settings):
        assert get_custom_week_number("2025-01-05", 2025, plain_settings) == 1
        assert get_custom_week_number("2025-01-11", 2025, plain_settings) == 1

    def test_second_week(self, plain_settings):
        assert get_custom_week_number("2025-01-12", 2025, plain_settings) == 2

    def test_monday_start(self):
        settings = CalendarSettings.from_raw({"weekStartDay": 1})
        assert get_custom_week_number("2025-01-05", 2025, settings) == 0
        assert get_custom_week_number("2025-01-06", 2025, settings) == 1

    def test_incomplete_calibration_falls_back(self, plain_settings):
        """Only one week-1 date: calibration is ignored."""
        settings = CalendarSettings.from_raw({"weekStartDay": 0, "week1StartDate": "2025-01-08"})
        assert not settings.is_calibrated

        day = date(2025, 1, 1)
        while day <= date(2025, 3, 1):
            assert get_custom_week_number(day, 2025, settings) == \
                get_custom_week_number(day, 2025, plain_settings)
            day += timedelta(days=1)

    @pytest.mark.parametrize("week_start_day", range(7))
    @pytest.mark.parametrize("year", [2024, 2025, 2026])
    def test_monotonic_across_year(self, week_start_day, year):
        settings = CalendarSettings.from_raw({"weekStartDay": week_start_day})
        previous = -1
        day = date(year, 1, 1)
        while day.year == year:
            number = get_custom_week_number(day, year, settings)
            assert number >= previous
            previous = number
            day += timedelta(days=1)

    def test_unreadable_timestamp(self, plain_settings):
        assert get_custom_week_number(None, 2025, plain_settings) == 0
        assert get_custom_week_number("not a date", 2025, plain_settings) == 0


# ===================
# TEST 4: WEEK KEYS
# ===================

class TestWeekKey:
    """Tests for get_week_key."""

    def test_key_inside_year(self, calibrated_settings):
        assert get_week_key("2025-01-08", calibrated_settings) == WeekKey(year=2025, week=1)
        assert get_week_key("2025-01-15", calibrated_settings) == WeekKey(year=2025, week=2)

    def test_key_uses_week_start_year(self, calibrated_settings):
        """Jan 1, 2025 is in the week starting Dec 29, 2024."""
        assert get_week_key("2025-01-01", calibrated_settings) == WeekKey(year=2024, week=52)
        assert get_week_key("2024-12-29", calibrated_settings) == WeekKey(year=2024, week=52)

    def test_key_uncalibrated_cross_year(self, plain_settings):
        """First Sunday of 2024 is Jan 7; Dec 29, 2024 is 51 weeks later."""
        assert get_week_key("2025-01-02", plain_settings) == WeekKey(year=2024, week=52)

    def test_missing_timestamp(self, calibrated_settings):
        assert get_week_key(None, calibrated_settings) is None


# ===================
# TEST 5: INVERSE LOOKUP & LISTING
# ===================

class TestWeekStartDate:
    """Tests for get_week_start_date."""

    def test_known_weeks(self, calibrated_settings):
        assert get_week_start_date(2025, 1, calibrated_settings) == date(2025, 1, 5)
        assert get_week_start_date(2025, 2, calibrated_settings) == date(2025, 1, 12)
        assert get_week_start_date(2025, 52, calibrated_settings) == date(2025, 12, 28)

    def test_round_trips_with_week_key(self, calibrated_settings):
        start = get_week_start_date(2025, 20, calibrated_settings)
        assert get_week_key(start, calibrated_settings) == WeekKey(year=2025, week=20)

    def test_unknown_week(self, calibrated_settings):
        assert get_week_start_date(2025, 99, calibrated_settings) is None


class TestCalendarListing:
    """Tests for list_calendar_weeks and get_current_week_number."""

    def test_weeks_of_year(self, calibrated_settings, today):
        weeks = list_calendar_weeks(2025, calibrated_settings, today=today)

        assert len(weeks) == 52
        assert weeks[0].week_number == 1
        assert weeks[0].start == date(2025, 1, 5)
        assert weeks[0].end == date(2025, 1, 11)
        assert weeks[0].label == "Week 1 (Jan 5 - Jan 11)"
        assert weeks[-1].start == date(2025, 12, 28)

    def test_only_current_week_flagged(self, calibrated_settings, today):
        weeks = list_calendar_weeks(2025, calibrated_settings, today=today)
        current = [w for w in weeks if w.is_current_week]

        assert len(current) == 1
        assert current[0].week_number == 3

    def test_current_week_number(self, calibrated_settings, today):
        assert get_current_week_number(calibrated_settings, today=today) == 3

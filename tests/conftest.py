"""
Shared test fixtures.

Calendar settings used across the suite:
- calibrated: weeks start Sunday, week 1 = 2025-01-05 .. 2025-01-11
- plain: weeks start Sunday, no calibration
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from datetime import date

from models.settings import CalendarSettings
from services.period_service import generate_month_ranges


# ===================
# CALENDAR SETTINGS
# ===================

@pytest.fixture
def calibrated_settings() -> CalendarSettings:
    """Sunday weeks with week 1 pinned to Jan 5-11, 2025."""
    return CalendarSettings.from_raw({
        "weekStartDay": 0,
        "week1StartDate": "2025-01-05",
        "week1EndDate": "2025-01-11",
        "startWeekNumber": 1,
    })


@pytest.fixture
def plain_settings() -> CalendarSettings:
    """Sunday weeks, numbered from the first Sunday of the year."""
    return CalendarSettings.from_raw({"weekStartDay": 0})


@pytest.fixture
def month_calibrated_settings() -> CalendarSettings:
    """Calibrated weeks plus a 13-month year starting Jan 5, 2025."""
    return CalendarSettings.from_raw({
        "weekStartDay": 0,
        "week1StartDate": "2025-01-05",
        "week1EndDate": "2025-01-11",
        "month1StartDate": "2025-01-05",
        "month1EndDate": "2025-02-01",
    })


@pytest.fixture
def calendar_months_2025(plain_settings):
    """12 calendar months of 2025."""
    return generate_month_ranges(plain_settings, 2025)


@pytest.fixture
def today() -> date:
    """Fixed reference day (a Wednesday in week 3 of the calibrated calendar)."""
    return date(2025, 1, 22)

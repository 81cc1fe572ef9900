"""
Calendar service for custom fiscal week numbering.

Maps any timestamp to the organization's week number. Numbering is either
anchored on an explicit week-1 calibration interval or, when that is not
fully configured, counted from the first week start day of the year.

All functions take CalendarSettings explicitly; nothing reads global state.
"""

import math
from datetime import date, timedelta
from typing import List, Optional

import structlog

from config.calendar import (
    DAYS_PER_WEEK,
    PRE_SEASON_WEEK_NUMBER,
    WEEK_WRAP_LENGTH,
)
from models.period import CalendarWeek, WeekKey
from models.settings import CalendarSettings
from utils.date_utils import (
    DateLike,
    day_of_week,
    first_weekday_on_or_after,
    format_short,
    next_weekday_after,
    to_date,
)

logger = structlog.get_logger(__name__)


def start_of_week(value: DateLike, week_start_day: int) -> Optional[date]:
    """
    First day of the calendar week containing `value`.

    Args:
        value: Any date-like value
        week_start_day: 0 = Sunday ... 6 = Saturday

    Returns:
        Week start date, or None if `value` can't be read
    """
    day = to_date(value)
    if day is None:
        return None
    offset = (day_of_week(day) - week_start_day) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def end_of_week(value: DateLike, week_start_day: int) -> Optional[date]:
    """Last day of the calendar week containing `value`."""
    start = start_of_week(value, week_start_day)
    if start is None:
        return None
    return start + timedelta(days=DAYS_PER_WEEK - 1)


def get_custom_week_number(
    timestamp: DateLike,
    year: int,
    settings: CalendarSettings
) -> int:
    """
    Organization week number for a timestamp.

    Calibrated:
        - inside [week1_start, week1_end] -> start_week_number
        - after: weeks counted from the first week start day strictly
          after week1_end; days before it still belong to the
          calibration week
        - before: start_week_number - ceil(days / 7), wrapped by +52
          until positive

    Uncalibrated:
        - before the first week start day of `year` -> 0
        - otherwise floor(days / 7) + 1

    Time of day is ignored, so a timestamp on week1_end (any hour)
    stays in the calibration week.

    Args:
        timestamp: Date-like value
        year: Reference year (only used when uncalibrated)
        settings: Calendar settings

    Returns:
        Week number (0 only for the uncalibrated pre-season stub). An
        unreadable timestamp also gives 0.
    """
    day = to_date(timestamp)
    if day is None:
        return PRE_SEASON_WEEK_NUMBER

    if settings.is_calibrated:
        return _calibrated_week_number(day, settings)

    if settings.week1_start_date or settings.week1_end_date:
        logger.debug(
            "incomplete_week_calibration",
            week1_start_date=settings.week1_start_date,
            week1_end_date=settings.week1_end_date
        )

    first_week_start = first_weekday_on_or_after(date(year, 1, 1), settings.week_start_day)
    if day < first_week_start:
        return PRE_SEASON_WEEK_NUMBER

    return (day - first_week_start).days // DAYS_PER_WEEK + 1


def _calibrated_week_number(day: date, settings: CalendarSettings) -> int:
    """Week number relative to the week-1 calibration interval."""
    week1_start = settings.week1_start_date
    week1_end = settings.week1_end_date
    start_number = settings.start_week_number

    if week1_start <= day <= week1_end:
        return start_number

    if day > week1_end:
        first_regular = next_weekday_after(week1_end, settings.week_start_day)
        if day < first_regular:
            return start_number
        return start_number + 1 + (day - first_regular).days // DAYS_PER_WEEK

    diff_weeks = math.ceil((week1_start - day).days / DAYS_PER_WEEK)
    candidate = start_number - diff_weeks
    while candidate <= 0:
        candidate += WEEK_WRAP_LENGTH
    return candidate


def get_week_key(timestamp: DateLike, settings: CalendarSettings) -> Optional[WeekKey]:
    """
    Key of the week containing `timestamp`.

    Both the year and the number come from the week's start day, so every
    day of a week spanning New Year gets the same key.
    """
    start = start_of_week(timestamp, settings.week_start_day)
    if start is None:
        return None
    return WeekKey(
        year=start.year,
        week=get_custom_week_number(start, start.year, settings)
    )


def get_week_start_date(
    year: int,
    week: int,
    settings: CalendarSettings
) -> Optional[date]:
    """
    First day of the week with key (year, week).

    Scans the week starts of `year` (plus the one falling just before
    Jan 1, whose key year can't match but keeps the scan simple).

    Returns:
        Week start date, or None if no week of `year` has that number
    """
    candidate = start_of_week(date(year, 1, 1), settings.week_start_day)
    last_day = date(year, 12, 31)

    while candidate <= last_day:
        if candidate.year == year:
            if get_custom_week_number(candidate, year, settings) == week:
                return candidate
        candidate += timedelta(days=DAYS_PER_WEEK)

    return None


def format_week_label(week: int, start: date, end: date) -> str:
    """'Week 2 (Jan 12 - Jan 18)'."""
    return f"Week {week} ({format_short(start)} - {format_short(end)})"


def list_calendar_weeks(
    year: int,
    settings: CalendarSettings,
    today: Optional[date] = None
) -> List[CalendarWeek]:
    """
    Every week starting in `year`, oldest first.

    Args:
        year: Calendar year
        settings: Calendar settings
        today: Reference day for is_current_week (defaults to today)

    Returns:
        List of CalendarWeek
    """
    today = today or date.today()
    current_start = start_of_week(today, settings.week_start_day)

    weeks = []
    start = first_weekday_on_or_after(date(year, 1, 1), settings.week_start_day)
    while start.year == year:
        end = start + timedelta(days=DAYS_PER_WEEK - 1)
        number = get_custom_week_number(start, year, settings)
        weeks.append(CalendarWeek(
            week_number=number,
            year=year,
            start=start,
            end=end,
            label=format_week_label(number, start, end),
            is_current_week=start == current_start
        ))
        start += timedelta(days=DAYS_PER_WEEK)

    logger.debug("calendar_weeks_listed", year=year, count=len(weeks))

    return weeks


def get_current_week_number(
    settings: CalendarSettings,
    today: Optional[date] = None
) -> int:
    """Custom week number of today's week."""
    today = today or date.today()
    key = get_week_key(today, settings)
    return key.week

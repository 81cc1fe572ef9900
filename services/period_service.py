"""
Period enumeration service.

Derives the selectable weeks present in a record collection and the
configured month ranges. Weeks always include the current one so an empty
"this week" can still be picked downstream.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional

import structlog

from config.calendar import (
    CALIBRATED_MONTH_LENGTH_DAYS,
    CALIBRATED_MONTHS_PER_YEAR,
    DAYS_PER_WEEK,
    MONTH_NAMES,
)
from models.feedback import FeedbackRecord, as_records
from models.period import MonthPeriod, MonthRange, WeekKey, WeekPeriod
from models.settings import CalendarSettings
from services.calendar_service import format_week_label, get_week_key, start_of_week
from utils.date_utils import format_short, to_date

logger = structlog.get_logger(__name__)


def build_week_period(key: WeekKey, start: date) -> WeekPeriod:
    """Descriptor for the week starting on `start`."""
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return WeekPeriod(
        year=key.year,
        week=key.week,
        key=key.key,
        label=format_week_label(key.week, start, end),
        start=start,
        end=end
    )


def get_available_weeks(
    records: Iterable[FeedbackRecord],
    settings: CalendarSettings,
    today: Optional[date] = None
) -> List[WeekPeriod]:
    """
    Distinct weeks that records fall into, plus the current week.

    Records without a timestamp are skipped. If two different week starts
    resolve to the same key (possible with the 52-week wrap), the first
    one seen wins.

    Args:
        records: Feedback records
        settings: Calendar settings
        today: Reference day for the current week (defaults to today)

    Returns:
        WeekPeriod list sorted by (year, week) descending
    """
    today = today or date.today()
    week_start_day = settings.week_start_day

    periods: dict[WeekKey, WeekPeriod] = {}

    def add(day: date) -> None:
        start = start_of_week(day, week_start_day)
        key = get_week_key(start, settings)
        if key not in periods:
            periods[key] = build_week_period(key, start)

    for record in as_records(records):
        if record.timestamp is None:
            continue
        add(record.timestamp.date())

    add(today)

    weeks = sorted(periods.values(), key=lambda p: p.period_key, reverse=True)

    logger.debug(
        "weeks_enumerated",
        count=len(weeks),
        newest=weeks[0].key if weeks else None
    )

    return weeks


def generate_month_ranges(settings: CalendarSettings, year: int) -> List[MonthRange]:
    """
    Month ranges for a year.

    With month-1 calibration: month 1 is the configured interval and each
    following month is 28 days starting the day after the previous one
    ends, 13 months in total. Without it: the 12 calendar months of `year`.

    Args:
        settings: Calendar settings
        year: Calendar year (used for calendar months only)

    Returns:
        MonthRange list ordered by index (1-based)
    """
    if settings.has_month_calibration:
        return _calibrated_month_ranges(settings)

    if settings.month1_start_date or settings.month1_end_date:
        logger.debug(
            "incomplete_month_calibration",
            month1_start_date=settings.month1_start_date,
            month1_end_date=settings.month1_end_date
        )

    ranges = []
    for month in range(1, 13):
        start = date(year, month, 1)
        next_start = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        end = next_start - timedelta(days=1)
        name = MONTH_NAMES[month - 1]
        ranges.append(MonthRange(
            index=month,
            year=year,
            start=start,
            end=end,
            label=f"{name} ({format_short(start)} - {format_short(end)})",
            short_label=name[:3]
        ))
    return ranges


def _calibrated_month_ranges(settings: CalendarSettings) -> List[MonthRange]:
    """13 ranges anchored on the month-1 interval."""
    ranges = []
    start = settings.month1_start_date
    end = settings.month1_end_date

    for index in range(1, CALIBRATED_MONTHS_PER_YEAR + 1):
        if index > 1:
            start = end + timedelta(days=1)
            end = start + timedelta(days=CALIBRATED_MONTH_LENGTH_DAYS - 1)
        ranges.append(MonthRange(
            index=index,
            year=start.year,
            start=start,
            end=end,
            label=f"Month {index} ({format_short(start)} - {format_short(end)})",
            short_label=f"M{index}"
        ))
    return ranges


def get_available_months(month_ranges: Iterable[MonthRange]) -> List[MonthPeriod]:
    """
    Every configured month, newest first.

    Empty months are listed too; the ranges are taken as given.

    Returns:
        MonthPeriod list sorted by (year, month) descending
    """
    months = [
        MonthPeriod(
            year=r.year,
            month=r.index,
            key=r.key,
            label=r.label,
            short_label=r.short_label,
            start=r.start,
            end=r.end
        )
        for r in month_ranges
    ]
    months.sort(key=lambda m: (m.year, m.month), reverse=True)

    logger.debug("months_enumerated", count=len(months))

    return months


def find_month_range(
    month_index: int,
    month_ranges: Iterable[MonthRange]
) -> Optional[MonthRange]:
    """Range with the given 1-based index, or None."""
    for r in month_ranges:
        if r.index == month_index:
            return r
    return None


def find_month_index(value, month_ranges: Iterable[MonthRange]) -> Optional[int]:
    """
    Index of the range that contains a date-like value.

    Ranges are searched in order; the first hit wins.
    """
    day = to_date(value)
    if day is None:
        return None
    for r in month_ranges:
        if r.contains(day):
            return r.index
    return None

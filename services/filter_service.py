"""
Record filter service.

Selects the records that fall into a week, a configured month, or an
arbitrary date range. Filters never mutate their input and keep the
input order. Records without a timestamp never match a period.
"""

from datetime import date
from typing import Iterable, List, Optional

import structlog

from models.feedback import FeedbackRecord, as_records
from models.period import MonthRange
from models.settings import CalendarSettings
from services.calendar_service import get_week_key
from services.period_service import find_month_range
from utils.date_utils import DateLike, end_of_day, start_of_day, to_date

logger = structlog.get_logger(__name__)


def filter_records_by_week(
    records: Iterable[FeedbackRecord],
    year: int,
    week_number: int,
    settings: CalendarSettings
) -> List[FeedbackRecord]:
    """
    Records whose week key is (year, week_number).

    The year compared is the year of the record's week START, not the
    record's own year.
    """
    matched = []
    for record in as_records(records):
        if record.timestamp is None:
            continue
        key = get_week_key(record.timestamp, settings)
        if key.year == year and key.week == week_number:
            matched.append(record)
    return matched


def filter_records_by_month(
    records: Iterable[FeedbackRecord],
    month_index: int,
    month_ranges: Iterable[MonthRange]
) -> List[FeedbackRecord]:
    """
    Records inside the configured month range at `month_index` (inclusive).

    Unknown index gives an empty list.
    """
    month_range = find_month_range(month_index, month_ranges)
    if month_range is None:
        logger.debug("unknown_month_index", month_index=month_index)
        return []

    return filter_records_by_date_range(records, month_range.start, month_range.end)


def filter_records_by_date_range(
    records: Iterable[FeedbackRecord],
    start: Optional[DateLike],
    end: Optional[DateLike]
) -> List[FeedbackRecord]:
    """
    Records with start 00:00:00.000 <= timestamp <= end 23:59:59.999.

    If either bound is missing (or unreadable) every record is returned
    unfiltered.
    """
    records = as_records(records)

    start_day: Optional[date] = to_date(start)
    end_day: Optional[date] = to_date(end)
    if start_day is None or end_day is None:
        return list(records)

    lower = start_of_day(start_day)
    upper = end_of_day(end_day)

    return [
        record for record in records
        if record.timestamp is not None and lower <= record.timestamp <= upper
    ]

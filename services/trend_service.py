"""
Trend calculation service.

Builds per-team or per-reason violation series across consecutive weeks or
months. Every series has one slot per analyzed period, oldest first, with
explicit zeros where a group had nothing.
"""

from collections import Counter
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

import structlog

from config.calendar import (
    DEFAULT_TREND_SPAN,
    NEUTRALS_PER_EQUIVALENT_DETRACTOR,
    NO_TOP_REASON,
    UNSPECIFIED_REASON,
)
from exceptions import InvalidGroupByError, InvalidPeriodTypeError, ValidationError
from models.feedback import FeedbackRecord, ScoreCategory, as_records
from models.period import DateRange, MonthPeriod, MonthRange, PeriodType, WeekPeriod
from models.settings import CalendarSettings
from models.trends import ReasonCount, TrendGroupBy, TrendSeries
from services.filter_service import filter_records_by_month, filter_records_by_week
from services.period_service import (
    generate_month_ranges,
    get_available_months,
    get_available_weeks,
)
from utils.date_utils import end_of_day, start_of_day

logger = structlog.get_logger(__name__)

Period = Union[WeekPeriod, MonthPeriod]


def equivalent_detractors(detractors: int, neutrals: int) -> int:
    """Detractors plus one per three neutrals (floor)."""
    return detractors + neutrals // NEUTRALS_PER_EQUIVALENT_DETRACTOR


def group_key(record: FeedbackRecord, group_by: TrendGroupBy) -> Optional[str]:
    """
    Group a record belongs to.

    Reasons default to "Unspecified"; records without a team are not
    grouped at all.
    """
    if group_by == TrendGroupBy.REASON:
        return record.reason or UNSPECIFIED_REASON
    return record.team_name or None


def period_label(period: Period) -> str:
    """'W12' for weeks, the short label ('M3' / 'Mar') for months."""
    if isinstance(period, WeekPeriod):
        return f"W{period.week}"
    return period.short_label


def select_periods(
    all_periods: List[Period],
    span: Union[int, str],
    date_range: Optional[DateRange]
) -> List[Period]:
    """
    Periods to analyze, oldest first.

    A complete date range keeps every period whose start falls inside
    it; otherwise the newest `span` periods ('all' for every one).

    Args:
        all_periods: Periods sorted newest first
        span: Number of periods or 'all'
        date_range: Optional custom range
    """
    if date_range is not None and date_range.is_complete:
        lower = start_of_day(date_range.start)
        upper = end_of_day(date_range.end)
        selected = [p for p in all_periods if lower <= start_of_day(p.start) <= upper]
    elif span == "all":
        selected = list(all_periods)
    else:
        try:
            count = int(span)
        except (TypeError, ValueError):
            raise ValidationError(
                message="Trend span must be a number of periods or 'all'",
                code="INVALID_TREND_SPAN",
                details={"provided": repr(span)}
            )
        selected = all_periods[:max(0, count)]

    return list(reversed(selected))


def calculate_trend_data(
    records: Iterable[FeedbackRecord],
    settings: CalendarSettings,
    period: Union[PeriodType, str] = PeriodType.WEEK,
    span: Union[int, str] = DEFAULT_TREND_SPAN,
    group_by: Union[TrendGroupBy, str] = TrendGroupBy.TEAM,
    date_range: Optional[Union[DateRange, dict]] = None,
    month_ranges: Optional[List[MonthRange]] = None,
    today: Optional[date] = None
) -> Dict[str, TrendSeries]:
    """
    Violation trend per group.

    Args:
        records: Feedback records
        settings: Calendar settings
        period: week | month
        span: Number of most recent periods, or 'all'
        group_by: team | reason
        date_range: Custom range; when complete it replaces `span`
        month_ranges: Configured months (defaults to today's year)
        today: Reference day (defaults to today)

    Returns:
        Dict of group key -> TrendSeries, in order of first appearance

    Raises:
        InvalidPeriodTypeError: If period is not week/month
        InvalidGroupByError: If group_by is not team/reason
    """
    try:
        period = PeriodType(period)
    except ValueError:
        raise InvalidPeriodTypeError(str(period))

    try:
        group_by = TrendGroupBy(group_by)
    except ValueError:
        raise InvalidGroupByError(str(group_by))

    if isinstance(date_range, dict):
        date_range = DateRange.model_validate(date_range)

    records = as_records(records)
    today = today or date.today()

    if period == PeriodType.WEEK:
        all_periods = get_available_weeks(records, settings, today=today)
    else:
        if month_ranges is None:
            month_ranges = generate_month_ranges(settings, today.year)
        all_periods = get_available_months(month_ranges)

    periods = select_periods(all_periods, span, date_range)

    # Records per analyzed period, resolved once
    records_by_period = []
    for p in periods:
        if isinstance(p, WeekPeriod):
            records_by_period.append(filter_records_by_week(records, p.year, p.week, settings))
        else:
            records_by_period.append(filter_records_by_month(records, p.month, month_ranges))

    # Union of group keys across every analyzed period
    keys: List[str] = []
    for period_records in records_by_period:
        for record in period_records:
            key = group_key(record, group_by)
            if key and key not in keys:
                keys.append(key)

    labels = [period_label(p) for p in periods]
    size = len(periods)
    detractors = {key: [0] * size for key in keys}
    neutrals = {key: [0] * size for key in keys}
    reasons = {key: Counter() for key in keys}

    for index, period_records in enumerate(records_by_period):
        for record in period_records:
            key = group_key(record, group_by)
            if key is None:
                continue

            category = record.category
            if category == ScoreCategory.DETRACTOR:
                detractors[key][index] += 1
            elif category == ScoreCategory.NEUTRAL:
                neutrals[key][index] += 1
            else:
                continue

            reasons[key][record.reason or UNSPECIFIED_REASON] += 1

    trends: Dict[str, TrendSeries] = {}
    for key in keys:
        # sorted() is stable: ties keep first-seen order
        all_reasons = [
            ReasonCount(reason=reason, count=count)
            for reason, count in sorted(reasons[key].items(), key=lambda item: -item[1])
        ]
        top = all_reasons[0] if all_reasons else None

        trends[key] = TrendSeries(
            periods=list(labels),
            detractors=detractors[key],
            neutrals=neutrals[key],
            total_violations=[d + n for d, n in zip(detractors[key], neutrals[key])],
            equivalent_detractors=[
                equivalent_detractors(d, n) for d, n in zip(detractors[key], neutrals[key])
            ],
            top_reason=top.reason if top else NO_TOP_REASON,
            top_reason_count=top.count if top else 0,
            all_reasons=all_reasons
        )

    logger.debug(
        "trend_calculated",
        period=period.value,
        group_by=group_by.value,
        periods=size,
        groups=len(trends)
    )

    return trends

"""
Period statistics service.

Turns record counts and reported sample sizes into per-period
detractor/neutral/promoter percentages and NPS, and builds the NPS summary
for a dashboard selection.

Promoters are never counted from records: they are whoever is left of the
reported sample after subtracting detractors and neutrals.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Tuple, Union

import structlog

from exceptions import InvalidSelectionError, ValidationError
from models.feedback import FeedbackRecord, SampleEntry, ScoreCategory, as_records, as_samples
from models.period import (
    MonthKey,
    MonthPeriod,
    MonthRange,
    PeriodSelection,
    PeriodStats,
    RangeTarget,
    SampleMode,
    SelectionType,
    WeekKey,
    WeekPeriod,
    WeekTarget,
)
from models.settings import CalendarSettings
from models.trends import NpsSummary
from services.calendar_service import end_of_week, get_week_key, get_week_start_date
from services.filter_service import (
    filter_records_by_date_range,
    filter_records_by_month,
    filter_records_by_week,
)
from services.period_service import find_month_index, find_month_range
from services.sample_service import aggregate_samples

logger = structlog.get_logger(__name__)

PeriodKey = Union[WeekKey, MonthKey]


# ===================
# PURE CALCULATIONS
# ===================

def calculate_percentage(count: int, total: int) -> int:
    """
    Integer percentage of count over total, clamped to [0, 100].

    Rounds half away from zero. A zero total gives 0.
    """
    if total <= 0:
        return 0
    value = (Decimal(count) * 100 / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(value)))


def calculate_percentage_change(current: float, previous: float) -> int:
    """
    Relative change from previous to current, in whole percent.

    previous == 0 gives 100 if current grew, else 0.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    change = (Decimal(str(current)) - Decimal(str(previous))) * 100 / Decimal(str(previous))
    return int(change.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_period_stats(sample_size: int, detractors: int, neutrals: int) -> PeriodStats:
    """
    Percentages for one period.

    Each category is rounded on its own, so the three need not add up
    to 100.
    """
    sample_size = max(0, sample_size)
    promoters = max(0, sample_size - detractors - neutrals)

    detractors_pct = calculate_percentage(detractors, sample_size)
    neutrals_pct = calculate_percentage(neutrals, sample_size)
    promoters_pct = calculate_percentage(promoters, sample_size)

    return PeriodStats(
        sample_size=sample_size,
        detractors=detractors,
        neutrals=neutrals,
        promoters=promoters,
        detractors_pct=detractors_pct,
        neutrals_pct=neutrals_pct,
        promoters_pct=promoters_pct,
        nps=promoters_pct - detractors_pct
    )


def count_categories(records: Iterable[FeedbackRecord]) -> Tuple[int, int]:
    """(detractors, neutrals) among the records."""
    detractors = neutrals = 0
    for record in records:
        category = record.category
        if category == ScoreCategory.DETRACTOR:
            detractors += 1
        elif category == ScoreCategory.NEUTRAL:
            neutrals += 1
    return detractors, neutrals


# ===================
# GROUPING
# ===================

def _resolve_period_key(value) -> PeriodKey:
    if isinstance(value, (WeekKey, MonthKey)):
        return value
    if isinstance(value, (WeekPeriod, MonthPeriod, MonthRange)):
        return value.period_key
    raise ValidationError(
        message="Period key must be a week or month key",
        code="INVALID_PERIOD_KEY",
        details={"provided": repr(value)}
    )


def group_by_period(
    records: Iterable[FeedbackRecord],
    period_keys: Iterable[Union[PeriodKey, WeekPeriod, MonthPeriod, MonthRange]],
    settings: CalendarSettings,
    samples: Iterable[SampleEntry],
    month_ranges: Optional[List[MonthRange]] = None
) -> Dict[PeriodKey, PeriodStats]:
    """
    PeriodStats for every requested key.

    Every requested key is present in the result, zeroed when nothing
    falls into it. Records and samples outside the requested keys are
    ignored.

    Args:
        records: Feedback records
        period_keys: WeekKey / MonthKey (or period descriptors)
        settings: Calendar settings
        samples: Sample entries
        month_ranges: Configured months, needed to resolve MonthKey

    Returns:
        Dict of key -> PeriodStats, in request order
    """
    keys = [_resolve_period_key(k) for k in period_keys]
    records = as_records(records)
    samples = as_samples(samples)
    month_ranges = month_ranges or []

    counts: Dict[PeriodKey, List[int]] = {key: [0, 0] for key in keys}
    wants_weeks = any(isinstance(k, WeekKey) for k in keys)
    wants_months = any(isinstance(k, MonthKey) for k in keys)

    if wants_months and not month_ranges:
        logger.debug("month_keys_without_ranges", keys=[k.key for k in keys if isinstance(k, MonthKey)])

    for record in records:
        if record.timestamp is None:
            continue
        category = record.category
        if category not in (ScoreCategory.DETRACTOR, ScoreCategory.NEUTRAL):
            continue

        slot = 0 if category == ScoreCategory.DETRACTOR else 1

        if wants_weeks:
            week_key = get_week_key(record.timestamp, settings)
            if week_key in counts:
                counts[week_key][slot] += 1

        if wants_months:
            index = find_month_index(record.timestamp, month_ranges)
            if index is not None:
                month_key = MonthKey(index=index)
                if month_key in counts:
                    counts[month_key][slot] += 1

    result: Dict[PeriodKey, PeriodStats] = {}
    for key in keys:
        sample_size = _period_sample_size(key, samples, settings, month_ranges)
        detractors, neutrals = counts[key]
        result[key] = build_period_stats(sample_size, detractors, neutrals)

    logger.debug("periods_grouped", periods=len(result), records=len(records), samples=len(samples))

    return result


def _period_sample_size(
    key: PeriodKey,
    samples: List[SampleEntry],
    settings: CalendarSettings,
    month_ranges: List[MonthRange]
) -> int:
    if isinstance(key, WeekKey):
        target = WeekTarget(
            year=key.year,
            week=key.week,
            start_date=get_week_start_date(key.year, key.week, settings)
        )
        return aggregate_samples(samples, SampleMode.WEEK, target, settings)

    month_range = find_month_range(key.index, month_ranges)
    if month_range is None:
        return 0
    return aggregate_samples(samples, SampleMode.MONTH, month_range, settings)


# ===================
# NPS SUMMARY
# ===================

def build_nps_summary(
    records: Iterable[FeedbackRecord],
    total_samples: int,
    settings: CalendarSettings,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None
) -> NpsSummary:
    """
    Headline NPS numbers with target alarms.

    Alarms only fire when there is a sample to judge:
    promoters% below target or detractors% above target.
    """
    detractors, neutrals = count_categories(as_records(records))
    stats = build_period_stats(total_samples, detractors, neutrals)
    targets = settings.nps_targets
    has_samples = stats.sample_size > 0

    return NpsSummary(
        total_samples=stats.sample_size,
        detractors=stats.detractors,
        neutrals=stats.neutrals,
        promoters=stats.promoters,
        detractors_pct=stats.detractors_pct,
        neutrals_pct=stats.neutrals_pct,
        promoters_pct=stats.promoters_pct,
        nps=stats.nps,
        target_promoters=targets.promoters,
        target_detractors=targets.detractors,
        is_promoter_alarm=has_samples and stats.promoters_pct < targets.promoters,
        is_detractor_alarm=has_samples and stats.detractors_pct > targets.detractors,
        period_start=period_start,
        period_end=period_end
    )


def summarize_selection(
    records: Iterable[FeedbackRecord],
    samples: Iterable[SampleEntry],
    selection: Union[PeriodSelection, dict],
    settings: CalendarSettings,
    month_ranges: Optional[List[MonthRange]] = None,
    today: Optional[date] = None
) -> NpsSummary:
    """
    NPS summary for a dashboard selection.

    - all: every record and sample; period is the selection year
      (defaults to today's year)
    - week: records of (year, week) and that week's samples
    - month: records and samples of the configured month
    - custom: records and samples between start and end; an incomplete
      range falls back to everything

    Raises:
        InvalidSelectionError: If the selection type is unknown
        ValidationError: If a week/month selection is missing its fields
    """
    if isinstance(selection, dict):
        try:
            selection_type = SelectionType(selection.get("type", SelectionType.ALL))
        except ValueError:
            raise InvalidSelectionError(str(selection.get("type")))
        selection = PeriodSelection.model_validate({**selection, "type": selection_type})

    records = as_records(records)
    samples = as_samples(samples)
    today = today or date.today()
    month_ranges = month_ranges or []

    if selection.type == SelectionType.ALL:
        year = selection.year or today.year
        return build_nps_summary(
            records,
            aggregate_samples(samples, SampleMode.ALL, None, settings),
            settings,
            period_start=date(year, 1, 1),
            period_end=date(year, 12, 31)
        )

    if selection.type == SelectionType.WEEK:
        if selection.year is None or selection.week is None:
            raise ValidationError(
                message="Week selection needs year and week",
                details={"year": selection.year, "week": selection.week}
            )
        start = get_week_start_date(selection.year, selection.week, settings)
        target = WeekTarget(year=selection.year, week=selection.week, start_date=start)
        return build_nps_summary(
            filter_records_by_week(records, selection.year, selection.week, settings),
            aggregate_samples(samples, SampleMode.WEEK, target, settings),
            settings,
            period_start=start,
            period_end=end_of_week(start, settings.week_start_day)
        )

    if selection.type == SelectionType.MONTH:
        if selection.month is None:
            raise ValidationError(
                message="Month selection needs a month index",
                details={"month": selection.month}
            )
        month_range = find_month_range(selection.month, month_ranges)
        if month_range is None:
            logger.debug("unknown_month_index", month_index=selection.month)
            return build_nps_summary([], 0, settings)
        return build_nps_summary(
            filter_records_by_month(records, selection.month, month_ranges),
            aggregate_samples(samples, SampleMode.MONTH, month_range, settings),
            settings,
            period_start=month_range.start,
            period_end=month_range.end
        )

    target = RangeTarget(start=selection.start, end=selection.end)
    return build_nps_summary(
        filter_records_by_date_range(records, target.start, target.end),
        aggregate_samples(samples, SampleMode.RANGE, target, settings),
        settings,
        period_start=target.start,
        period_end=target.end
    )

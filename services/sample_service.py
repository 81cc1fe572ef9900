"""
Sample aggregation service.

Sums externally reported sample sizes that belong to a week, a configured
month, or a date range. Samples are matched by an ordered list of
strategies per mode. Each strategy answers True (match), False (decisive
miss) or None (no signal, try the next one). A sample no strategy can
place is excluded, never guessed.
"""

from datetime import date, timedelta
from typing import Any, Callable, Iterable, List, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from config.calendar import DAYS_PER_WEEK
from exceptions import InvalidSampleModeError
from models.feedback import SampleEntry, as_samples
from models.period import MonthRange, RangeTarget, SampleMode, WeekTarget
from models.settings import CalendarSettings
from services.calendar_service import get_week_key, get_week_start_date

logger = structlog.get_logger(__name__)

Target = Union[WeekTarget, MonthRange, RangeTarget, dict, None]
Strategy = Callable[[SampleEntry, Any, CalendarSettings], Optional[bool]]


# ===================
# WEEK STRATEGIES
# ===================

def _week_exact_start_date(sample: SampleEntry, target: WeekTarget, settings) -> Optional[bool]:
    """Sample dated on the exact first day of the target week."""
    if sample.start_date is None or target.start_date is None:
        return None
    if sample.start_date == target.start_date:
        return True
    return None


def _week_number_and_year(sample: SampleEntry, target: WeekTarget, settings) -> Optional[bool]:
    """Sample labelled with the target (week, year)."""
    if sample.week_number is None or sample.year is None:
        return None
    return sample.week_number == target.week and sample.year == target.year


# ===================
# MONTH STRATEGIES
# ===================

def _month_start_date(sample: SampleEntry, target: MonthRange, settings) -> Optional[bool]:
    """Sample's own start date inside the month."""
    if sample.start_date is None:
        return None
    return target.contains(sample.start_date)


def _month_estimated_week_start(sample: SampleEntry, target: MonthRange, settings) -> Optional[bool]:
    """Week start estimated from the week-1 anchor inside the month."""
    if not settings.is_calibrated or sample.week_number is None:
        return None
    estimate = settings.week1_start_date + timedelta(days=(sample.week_number - 1) * DAYS_PER_WEEK)
    return target.contains(estimate)


# ===================
# RANGE STRATEGIES
# ===================

def _range_start_date(sample: SampleEntry, target: RangeTarget, settings) -> Optional[bool]:
    """Sample's own start date inside the range."""
    if sample.start_date is None:
        return None
    return target.start <= sample.start_date <= target.end


def _range_week_overlap(sample: SampleEntry, target: RangeTarget, settings) -> Optional[bool]:
    """Implied week [start, start + 6] overlaps the range."""
    if sample.week_number is None or sample.year is None:
        return None

    week_start = _implied_week_start(sample, target.week_starts, settings)
    if week_start is None:
        return None

    week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
    return week_start <= target.end and week_end >= target.start


def _implied_week_start(
    sample: SampleEntry,
    week_starts: Optional[List[date]],
    settings: CalendarSettings
) -> Optional[date]:
    """Start of the sample's (week, year), from known week starts or the calendar."""
    if week_starts is None:
        return get_week_start_date(sample.year, sample.week_number, settings)

    for start in week_starts:
        key = get_week_key(start, settings)
        if key.year == sample.year and key.week == sample.week_number:
            return start
    return None


WEEK_STRATEGIES: List[Strategy] = [_week_exact_start_date, _week_number_and_year]
MONTH_STRATEGIES: List[Strategy] = [_month_start_date, _month_estimated_week_start]
RANGE_STRATEGIES: List[Strategy] = [_range_start_date, _range_week_overlap]


def sample_matches(
    sample: SampleEntry,
    target: Any,
    strategies: List[Strategy],
    settings: CalendarSettings
) -> bool:
    """Run strategies in order; the first non-None answer decides."""
    for strategy in strategies:
        result = strategy(sample, target, settings)
        if result is not None:
            return result
    return False


def aggregate_samples(
    samples: Iterable[SampleEntry],
    mode: Union[SampleMode, str],
    target: Target,
    settings: CalendarSettings
) -> int:
    """
    Total sample size for a week, month, range, or everything.

    Args:
        samples: Sample entries (dicts accepted)
        mode: week | month | range | all
        target: WeekTarget, MonthRange, RangeTarget (dicts accepted);
            ignored for `all`
        settings: Calendar settings

    Returns:
        Non-negative integer sum; 0 when the target cannot be read

    Raises:
        InvalidSampleModeError: If mode is not a known mode
    """
    try:
        mode = SampleMode(mode)
    except ValueError:
        raise InvalidSampleModeError(str(mode))

    samples = as_samples(samples)

    if mode == SampleMode.ALL:
        total = sum(s.sample_size for s in samples)
        logger.debug("samples_aggregated", mode=mode.value, count=len(samples), total=total)
        return total

    if target is None:
        logger.debug("sample_target_missing", mode=mode.value)
        return 0

    model = {
        SampleMode.WEEK: WeekTarget,
        SampleMode.MONTH: MonthRange,
        SampleMode.RANGE: RangeTarget,
    }[mode]
    try:
        target = _as_model(target, model)
    except PydanticValidationError as e:
        logger.debug(
            "sample_target_invalid",
            mode=mode.value,
            errors=e.errors(include_url=False, include_context=False)
        )
        return 0

    if mode == SampleMode.WEEK:
        if target.start_date is None:
            target = target.model_copy(update={
                "start_date": get_week_start_date(target.year, target.week, settings)
            })
        strategies = WEEK_STRATEGIES

    elif mode == SampleMode.MONTH:
        strategies = MONTH_STRATEGIES

    else:
        if not target.is_complete:
            # Same fallback as the record date-range filter
            total = sum(s.sample_size for s in samples)
            logger.debug("samples_aggregated", mode=mode.value, count=len(samples), total=total)
            return total
        strategies = RANGE_STRATEGIES

    matched = [s for s in samples if sample_matches(s, target, strategies, settings)]
    total = sum(s.sample_size for s in matched)

    logger.debug(
        "samples_aggregated",
        mode=mode.value,
        count=len(samples),
        matched=len(matched),
        total=total
    )

    return total


def _as_model(value, model):
    if isinstance(value, model):
        return value
    return model.model_validate(value)

"""
Pydantic models for validation and serialization.

Collaborator payloads arrive in camelCase; every model accepts both the
alias and the snake_case field name.
"""

from models.base import BaseSchema, FrozenSchema
from models.settings import CalendarSettings, NpsTargets
from models.feedback import (
    ScoreCategory,
    classify_score,
    FeedbackRecord,
    SampleEntry,
    as_records,
    as_samples,
)
from models.period import (
    PeriodType,
    SampleMode,
    SelectionType,
    WeekKey,
    MonthKey,
    WeekPeriod,
    MonthRange,
    MonthPeriod,
    CalendarWeek,
    DateRange,
    WeekTarget,
    RangeTarget,
    PeriodSelection,
    PeriodStats,
)
from models.trends import (
    TrendGroupBy,
    ReasonCount,
    TrendSeries,
    NpsSummary,
    TeamViolation,
    ReasonViolation,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Settings
    "CalendarSettings",
    "NpsTargets",

    # Feedback
    "ScoreCategory",
    "classify_score",
    "FeedbackRecord",
    "SampleEntry",
    "as_records",
    "as_samples",

    # Periods
    "PeriodType",
    "SampleMode",
    "SelectionType",
    "WeekKey",
    "MonthKey",
    "WeekPeriod",
    "MonthRange",
    "MonthPeriod",
    "CalendarWeek",
    "DateRange",
    "WeekTarget",
    "RangeTarget",
    "PeriodSelection",
    "PeriodStats",

    # Trends
    "TrendGroupBy",
    "ReasonCount",
    "TrendSeries",
    "NpsSummary",
    "TeamViolation",
    "ReasonViolation",
]

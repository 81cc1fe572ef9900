"""
Period models.

Structured week/month keys, the period descriptors handed to the
presentation layer, and the per-period statistics shape.
"""

from datetime import date
from enum import Enum
from functools import total_ordering
from typing import Optional

from pydantic import Field, field_validator

from models.base import BaseSchema, FrozenSchema
from utils.date_utils import to_date


class PeriodType(str, Enum):
    """Bucket granularity."""
    WEEK = "week"
    MONTH = "month"


class SampleMode(str, Enum):
    """How sample entries are matched against a target."""
    WEEK = "week"
    MONTH = "month"
    RANGE = "range"
    ALL = "all"


class SelectionType(str, Enum):
    """Dashboard period filter."""
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


# ===================
# KEYS
# ===================

@total_ordering
class WeekKey(FrozenSchema):
    """
    Custom week identifier.

    `year` is the calendar year of the week's START day, so a week that
    spans Dec 29 - Jan 4 keeps one key for all seven days.
    """

    year: int
    week: int

    @property
    def key(self) -> str:
        return f"{self.year}-W{self.week}"

    def __str__(self) -> str:
        return self.key

    def __lt__(self, other):
        if not isinstance(other, WeekKey):
            return NotImplemented
        return (self.year, self.week) < (other.year, other.week)


@total_ordering
class MonthKey(FrozenSchema):
    """Index (1-based) into an ordered list of month ranges."""

    index: int = Field(..., ge=1)

    @property
    def key(self) -> str:
        return f"Month-{self.index}"

    def __str__(self) -> str:
        return self.key

    def __lt__(self, other):
        if not isinstance(other, MonthKey):
            return NotImplemented
        return self.index < other.index


# ===================
# PERIOD DESCRIPTORS
# ===================

class WeekPeriod(BaseSchema):
    """One selectable week."""

    year: int
    week: int
    key: str = Field(..., description="e.g. '2025-W2'")
    label: str = Field(..., description="e.g. 'Week 2 (Jan 12 - Jan 18)'")
    start: date
    end: date

    @property
    def period_key(self) -> WeekKey:
        return WeekKey(year=self.year, week=self.week)


class MonthRange(FrozenSchema):
    """
    One configured month.

    Boundaries come from configuration and need not align with calendar
    months.
    """

    index: int = Field(..., ge=1)
    year: int
    start: date
    end: date
    label: str
    short_label: str = Field(..., alias="shortLabel")

    @property
    def key(self) -> str:
        return f"Month-{self.index}"

    @property
    def period_key(self) -> MonthKey:
        return MonthKey(index=self.index)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class MonthPeriod(BaseSchema):
    """One selectable month."""

    year: int
    month: int
    key: str = Field(..., description="e.g. 'Month-3'")
    label: str
    short_label: str = Field(..., alias="shortLabel")
    start: date
    end: date

    @property
    def period_key(self) -> MonthKey:
        return MonthKey(index=self.month)


class CalendarWeek(BaseSchema):
    """A row of the calendar overview for one year."""

    week_number: int = Field(..., alias="weekNumber")
    year: int
    start: date
    end: date
    label: str
    is_current_week: bool = Field(False, alias="isCurrentWeek")


# ===================
# TARGETS
# ===================

class DateRange(BaseSchema):
    """Inclusive date range; either bound may be missing."""

    start: Optional[date] = None
    end: Optional[date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_date(cls, v):
        return to_date(v)

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


class WeekTarget(BaseSchema):
    """Week a sample aggregation is aimed at."""

    year: int
    week: int
    start_date: Optional[date] = Field(None, alias="startDate")

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return to_date(v)


class RangeTarget(DateRange):
    """Date range a sample aggregation is aimed at, with known week starts."""

    week_starts: Optional[list[date]] = Field(None, alias="weekStarts")


class PeriodSelection(BaseSchema):
    """
    Dashboard filter.

    - all: no fields needed
    - week: year + week
    - month: month (1-based range index)
    - custom: start + end
    """

    type: SelectionType = SelectionType.ALL
    year: Optional[int] = None
    week: Optional[int] = None
    month: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_date(cls, v):
        return to_date(v)


# ===================
# STATISTICS
# ===================

class PeriodStats(BaseSchema):
    """
    Per-period counts and integer percentages.

    Dumped by alias for the presentation layer:
    {sampleSize, Detractors, Neutrals, Promoters, NPS}.
    """

    sample_size: int = Field(0, ge=0, alias="sampleSize")
    detractors: int = Field(0, ge=0, alias="detractorCount")
    neutrals: int = Field(0, ge=0, alias="neutralCount")
    promoters: int = Field(0, ge=0, alias="promoterCount")
    detractors_pct: int = Field(0, ge=0, le=100, alias="Detractors")
    neutrals_pct: int = Field(0, ge=0, le=100, alias="Neutrals")
    promoters_pct: int = Field(0, ge=0, le=100, alias="Promoters")
    nps: int = Field(0, ge=-100, le=100, alias="NPS")

"""
Trend and summary models.

Output shapes for the trend builder (per-group series over consecutive
periods), the NPS summary card, and the violation breakdown tables.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import Field

from config.calendar import NO_TOP_REASON
from models.base import BaseSchema


class TrendGroupBy(str, Enum):
    """Categorical field trend series are split by."""

    TEAM = "team"
    REASON = "reason"


class ReasonCount(BaseSchema):
    """One row of a reason frequency table."""

    reason: str
    count: int = Field(..., ge=0)


class TrendSeries(BaseSchema):
    """
    Series for one group key across the analyzed periods.

    Every list has one slot per period, oldest first. Periods without
    data hold 0.
    """

    periods: List[str] = Field(default_factory=list, description="Period labels (e.g., 'W12', 'M3')")
    detractors: List[int] = Field(default_factory=list)
    neutrals: List[int] = Field(default_factory=list)
    total_violations: List[int] = Field(default_factory=list, alias="totalViolations")
    equivalent_detractors: List[int] = Field(default_factory=list, alias="equivalentDetractors")
    top_reason: str = Field(NO_TOP_REASON, alias="topReason")
    top_reason_count: int = Field(0, ge=0, alias="topReasonCount")
    all_reasons: List[ReasonCount] = Field(default_factory=list, alias="allReasons")


class NpsSummary(BaseSchema):
    """Headline NPS numbers for a selection, with target alarms."""

    total_samples: int = Field(0, ge=0, alias="totalSamples")
    detractors: int = Field(0, ge=0)
    neutrals: int = Field(0, ge=0)
    promoters: int = Field(0, ge=0)
    detractors_pct: int = Field(0, alias="detractorsPercentage")
    neutrals_pct: int = Field(0, alias="neutralsPercentage")
    promoters_pct: int = Field(0, alias="promotersPercentage")
    nps: int = 0
    target_promoters: float = Field(..., alias="targetPromoters")
    target_detractors: float = Field(..., alias="targetDetractors")
    is_promoter_alarm: bool = Field(False, alias="isPromoterAlarm")
    is_detractor_alarm: bool = Field(False, alias="isDetractorAlarm")
    period_start: Optional[date] = Field(None, alias="periodStart")
    period_end: Optional[date] = Field(None, alias="periodEnd")


class TeamViolation(BaseSchema):
    """Detractor/neutral counts for one team."""

    id: int = Field(..., ge=1)
    team_name: str = Field(..., alias="teamName")
    team_company: str = Field(..., alias="teamCompany")
    detractors: int = Field(0, ge=0)
    neutrals: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class ReasonViolation(BaseSchema):
    """Violation total for one reason and its share of all violations."""

    reason: str
    total: int = Field(0, ge=0)
    percentage: float = Field(0, ge=0, le=100)

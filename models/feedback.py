"""
Feedback record and sample schemas.

Records are survey/task entries owned by the external data store; the
engine only reads them. Malformed per-record values never raise: they are
coerced to None (or 0 for sample sizes) and the record is simply excluded
from whatever needs the missing value.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from config.calendar import (
    DETRACTOR_MAX_SCORE,
    DETRACTOR_MIN_SCORE,
    NEUTRAL_MAX_SCORE,
    NEUTRAL_MIN_SCORE,
    PROMOTER_MAX_SCORE,
    PROMOTER_MIN_SCORE,
)
from models.base import BaseSchema
from utils.date_utils import to_date, to_datetime


class ScoreCategory(str, Enum):
    """Score partition of a 1-10 evaluation."""
    DETRACTOR = "detractor"  # 1-6
    NEUTRAL = "neutral"      # 7-8
    PROMOTER = "promoter"    # 9-10


def classify_score(score: Optional[int]) -> Optional[ScoreCategory]:
    """
    Map an evaluation score to its category.

    Returns None for missing or out-of-range scores.
    """
    if score is None:
        return None
    if DETRACTOR_MIN_SCORE <= score <= DETRACTOR_MAX_SCORE:
        return ScoreCategory.DETRACTOR
    if NEUTRAL_MIN_SCORE <= score <= NEUTRAL_MAX_SCORE:
        return ScoreCategory.NEUTRAL
    if PROMOTER_MIN_SCORE <= score <= PROMOTER_MAX_SCORE:
        return ScoreCategory.PROMOTER
    return None


def _coerce_int(v: Any) -> Optional[int]:
    """Read an integer out of a loosely typed value, or None."""
    if v is None or isinstance(v, bool):
        return None
    try:
        number = float(v)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number)


class FeedbackRecord(BaseSchema):
    """
    One scored feedback entry.

    Only timestamp and evaluation_score drive the engine; category fields
    are used for grouping. Unknown fields are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    timestamp: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("timestamp", "interviewDate"),
        description="When the feedback was collected"
    )
    evaluation_score: Optional[int] = Field(
        None, alias="evaluationScore", description="Score 1-10"
    )
    team_name: Optional[str] = Field(None, alias="teamName")
    team_company: Optional[str] = Field(None, alias="teamCompany")
    reason: Optional[str] = None
    sub_reason: Optional[str] = Field(None, alias="subReason")
    root_cause: Optional[str] = Field(None, alias="rootCause")
    owner: Optional[str] = None
    priority: Optional[str] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        """Parse timestamp; unreadable values become None."""
        return to_datetime(v)

    @field_validator("evaluation_score", mode="before")
    @classmethod
    def parse_score(cls, v):
        """Parse score; non-numeric values become None."""
        return _coerce_int(v)

    @field_validator(
        "team_name", "team_company", "reason", "sub_reason",
        "root_cause", "owner", "priority",
        mode="before"
    )
    @classmethod
    def stringify(cls, v):
        """Category fields are free text; blank means absent."""
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @property
    def category(self) -> Optional[ScoreCategory]:
        """Score category of this record."""
        return classify_score(self.evaluation_score)

    @property
    def day(self) -> Optional[date]:
        """Calendar day of the timestamp."""
        return self.timestamp.date() if self.timestamp else None


class SampleEntry(BaseSchema):
    """
    Externally reported respondent count for one week.

    Several entries may exist for the same week; they are summed.
    """

    week_number: Optional[int] = Field(None, alias="weekNumber")
    year: Optional[int] = None
    sample_size: int = Field(0, ge=0, alias="sampleSize")
    start_date: Optional[date] = Field(None, alias="startDate")

    @field_validator("week_number", "year", mode="before")
    @classmethod
    def parse_int(cls, v):
        """Non-numeric week/year count as unknown."""
        return _coerce_int(v)

    @field_validator("sample_size", mode="before")
    @classmethod
    def parse_sample_size(cls, v):
        """Non-numeric or negative sizes contribute 0."""
        size = _coerce_int(v)
        if size is None or size < 0:
            return 0
        return size

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        """Parse date from string or datetime; unreadable values become None."""
        return to_date(v)


def as_records(items: Iterable[Any]) -> list[FeedbackRecord]:
    """Coerce store rows (dicts or objects) into FeedbackRecord models."""
    return [
        item if isinstance(item, FeedbackRecord) else FeedbackRecord.model_validate(item)
        for item in items or []
    ]


def as_samples(items: Iterable[Any]) -> list[SampleEntry]:
    """Coerce store rows (dicts or objects) into SampleEntry models."""
    return [
        item if isinstance(item, SampleEntry) else SampleEntry.model_validate(item)
        for item in items or []
    ]

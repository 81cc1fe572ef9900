"""
Calendar settings schemas.

The organization's calendar configuration as supplied by the settings
store. Every field is optional and falls back to the documented default;
the object is passed explicitly to every engine call.
"""

from datetime import date
from typing import Any, Optional, Union

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from config.calendar import (
    DEFAULT_DETRACTOR_TARGET,
    DEFAULT_PROMOTER_TARGET,
    DEFAULT_START_WEEK_NUMBER,
    DEFAULT_WEEK_START_DAY,
)
from exceptions import InvalidSettingsError
from models.base import FrozenSchema
from utils.date_utils import to_date


class NpsTargets(FrozenSchema):
    """Target percentages used for promoter/detractor alarms."""

    promoters: float = Field(
        DEFAULT_PROMOTER_TARGET, ge=0, le=100,
        description="Minimum acceptable promoter percentage"
    )
    detractors: float = Field(
        DEFAULT_DETRACTOR_TARGET, ge=0, le=100,
        description="Maximum acceptable detractor percentage"
    )


class CalendarSettings(FrozenSchema):
    """
    Organization calendar configuration.

    If only one of week1_start_date / week1_end_date is set, calibration
    is ignored and the plain annual numbering is used.
    """

    week_start_day: int = Field(
        DEFAULT_WEEK_START_DAY, ge=0, le=6, alias="weekStartDay",
        description="Day that begins a week (0 = Sunday ... 6 = Saturday)"
    )
    week1_start_date: Optional[date] = Field(
        None, alias="week1StartDate",
        description="First day of the calibration interval"
    )
    week1_end_date: Optional[date] = Field(
        None, alias="week1EndDate",
        description="Last day of the calibration interval (inclusive)"
    )
    start_week_number: int = Field(
        DEFAULT_START_WEEK_NUMBER, ge=1, alias="startWeekNumber",
        description="Number assigned to the calibration interval"
    )
    nps_targets: NpsTargets = Field(
        default_factory=NpsTargets, alias="npsTargets"
    )
    month1_start_date: Optional[date] = Field(
        None, alias="month1StartDate",
        description="First day of month 1 (13-month calendar)"
    )
    month1_end_date: Optional[date] = Field(
        None, alias="month1EndDate",
        description="Last day of month 1 (inclusive)"
    )

    @field_validator(
        "week1_start_date", "week1_end_date",
        "month1_start_date", "month1_end_date",
        mode="before"
    )
    @classmethod
    def parse_date(cls, v):
        """Parse date from string or datetime; unreadable values count as unset."""
        return to_date(v)

    @field_validator("week_start_day", mode="before")
    @classmethod
    def default_week_start_day(cls, v):
        """Missing week start day falls back to Sunday."""
        if v is None or v == "":
            return DEFAULT_WEEK_START_DAY
        return v

    @field_validator("start_week_number", mode="before")
    @classmethod
    def default_start_week_number(cls, v):
        """Missing start week number falls back to 1."""
        if v is None or v == "":
            return DEFAULT_START_WEEK_NUMBER
        return v

    @field_validator("nps_targets", mode="before")
    @classmethod
    def default_nps_targets(cls, v):
        """Missing targets fall back to the defaults."""
        if v is None:
            return NpsTargets()
        return v

    @property
    def is_calibrated(self) -> bool:
        """Both week-1 dates are present."""
        return self.week1_start_date is not None and self.week1_end_date is not None

    @property
    def has_month_calibration(self) -> bool:
        """Both month-1 dates are present."""
        return self.month1_start_date is not None and self.month1_end_date is not None

    @classmethod
    def from_raw(
        cls,
        raw: Union["CalendarSettings", dict[str, Any], None]
    ) -> "CalendarSettings":
        """
        Build settings from whatever the settings store handed over.

        None (settings not loaded yet) gives the defaults.

        Raises:
            InvalidSettingsError: If a present value can't be coerced
                (e.g. weekStartDay=9)
        """
        if raw is None:
            return cls()
        if isinstance(raw, cls):
            return raw
        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            raise InvalidSettingsError(
                e.errors(include_url=False, include_context=False)
            ) from e

"""
Custom exception classes for the reporting engine.

Per-record data problems never raise: missing timestamps, bad scores and
non-numeric sample sizes degrade to "excluded" or 0. These exceptions are
for caller misuse only (unknown modes, unusable settings payloads).
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all engine errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "INVALID_PERIOD_TYPE")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to the error payload shape consumers expect."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Caller supplied an unusable value."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details=details
        )


# ===================
# SPECIFIC ERRORS
# ===================

class InvalidSettingsError(ValidationError):
    """Calendar settings payload could not be coerced."""

    def __init__(self, errors: list):
        super().__init__(
            code="SETTINGS_INVALID",
            message="Calendar settings are invalid",
            details={"errors": errors}
        )


class InvalidPeriodTypeError(ValidationError):
    """Unknown period type."""

    def __init__(self, period: str):
        super().__init__(
            code="INVALID_PERIOD_TYPE",
            message="Period must be week or month",
            details={"provided": period, "valid": ["week", "month"]}
        )


class InvalidGroupByError(ValidationError):
    """Unknown trend grouping."""

    def __init__(self, group_by: str):
        super().__init__(
            code="INVALID_GROUP_BY",
            message="Group by must be team or reason",
            details={"provided": group_by, "valid": ["team", "reason"]}
        )


class InvalidSampleModeError(ValidationError):
    """Unknown sample aggregation mode."""

    def __init__(self, mode: str):
        super().__init__(
            code="INVALID_SAMPLE_MODE",
            message="Sample mode must be week, month, range, or all",
            details={"provided": mode, "valid": ["week", "month", "range", "all"]}
        )


class InvalidSelectionError(ValidationError):
    """Unknown dashboard selection type."""

    def __init__(self, selection: str):
        super().__init__(
            code="INVALID_SELECTION",
            message="Selection must be all, week, month, or custom",
            details={"provided": selection, "valid": ["all", "week", "month", "custom"]}
        )

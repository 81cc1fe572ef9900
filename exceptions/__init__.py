"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Engine misuse
    InvalidSettingsError,
    InvalidPeriodTypeError,
    InvalidGroupByError,
    InvalidSampleModeError,
    InvalidSelectionError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Engine misuse
    "InvalidSettingsError",
    "InvalidPeriodTypeError",
    "InvalidGroupByError",
    "InvalidSampleModeError",
    "InvalidSelectionError",
]

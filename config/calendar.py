"""
Scoring and calendar constants.

Fixed business rules for the detractor/neutral/promoter partition and the
custom fiscal calendar. Organization-specific values (week start day,
calibration dates, targets) come from CalendarSettings instead.
"""

# =============================================================================
# SCORE PARTITION
# =============================================================================
# Evaluation scores are 1-10. The bands are fixed, not configurable.

DETRACTOR_MIN_SCORE = 1
DETRACTOR_MAX_SCORE = 6
NEUTRAL_MIN_SCORE = 7
NEUTRAL_MAX_SCORE = 8
PROMOTER_MIN_SCORE = 9
PROMOTER_MAX_SCORE = 10


# =============================================================================
# NPS TARGETS
# =============================================================================

DEFAULT_PROMOTER_TARGET = 75
DEFAULT_DETRACTOR_TARGET = 8


# =============================================================================
# WEEK NUMBERING
# =============================================================================

DEFAULT_WEEK_START_DAY = 0  # 0 = Sunday ... 6 = Saturday
DEFAULT_START_WEEK_NUMBER = 1
DAYS_PER_WEEK = 7

# Weeks before the calibration interval wrap into the previous year's
# numbering space by adding this until the number is positive.
WEEK_WRAP_LENGTH = 52

# Uncalibrated calendars number the partial week before the first
# week start day of the year as week 0.
PRE_SEASON_WEEK_NUMBER = 0


# =============================================================================
# MONTH RANGES
# =============================================================================
# With a month-1 calibration, every following month is a strict 4-week
# period. 52 weeks / 4 = 13 months per year.

CALIBRATED_MONTH_LENGTH_DAYS = 28
CALIBRATED_MONTHS_PER_YEAR = 13

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]


# =============================================================================
# TRENDS
# =============================================================================

# Three neutral occurrences weigh as much as one detractor.
NEUTRALS_PER_EQUIVALENT_DETRACTOR = 3

DEFAULT_TREND_SPAN = 8

UNSPECIFIED_REASON = "Unspecified"
NO_TOP_REASON = "None"
UNKNOWN_TEAM = "Unknown"

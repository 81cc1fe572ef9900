"""
Business logic services.

Each service handles one layer of the period engine:
calendar -> periods/filters -> samples/statistics -> trends.
"""

from services.calendar_service import (
    start_of_week,
    end_of_week,
    get_custom_week_number,
    get_week_key,
    get_week_start_date,
    list_calendar_weeks,
    get_current_week_number,
)
from services.period_service import (
    get_available_weeks,
    generate_month_ranges,
    get_available_months,
    find_month_index,
)
from services.filter_service import (
    filter_records_by_week,
    filter_records_by_month,
    filter_records_by_date_range,
)
from services.sample_service import aggregate_samples
from services.statistics_service import (
    group_by_period,
    build_period_stats,
    build_nps_summary,
    summarize_selection,
    calculate_percentage_change,
)
from services.violation_service import get_team_violations, get_reason_violations
from services.trend_service import calculate_trend_data

__all__ = [
    # Calendar
    "start_of_week",
    "end_of_week",
    "get_custom_week_number",
    "get_week_key",
    "get_week_start_date",
    "list_calendar_weeks",
    "get_current_week_number",

    # Periods
    "get_available_weeks",
    "generate_month_ranges",
    "get_available_months",
    "find_month_index",

    # Filters
    "filter_records_by_week",
    "filter_records_by_month",
    "filter_records_by_date_range",

    # Samples & statistics
    "aggregate_samples",
    "group_by_period",
    "build_period_stats",
    "build_nps_summary",
    "summarize_selection",
    "calculate_percentage_change",

    # Breakdowns & trends
    "get_team_violations",
    "get_reason_violations",
    "calculate_trend_data",
]

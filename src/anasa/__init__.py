"""Greek leave optimizer.

Find the vacation windows around public holidays that turn a few leave days
into the longest breaks.
"""

from anasa.easter import julian_gregorian_offset, orthodox_easter
from anasa.holidays import CustomHoliday, Holiday, get_holidays, greek_holidays
from anasa.labels import efficiency, efficiency_label
from anasa.optimizer import (
    CalendarStats,
    DateRange,
    DayInfo,
    LeaveOptimizer,
    OptimizationResult,
    compute_single_window,
    compute_windows_for_budget,
    compute_year_calendar,
    generate_calendar,
)
from anasa.validation import DateRangeError, ValidationResult, validate_date_range

__all__ = [
    "CalendarStats",
    "CustomHoliday",
    "DateRange",
    "DateRangeError",
    "DayInfo",
    "Holiday",
    "LeaveOptimizer",
    "OptimizationResult",
    "ValidationResult",
    "compute_single_window",
    "compute_windows_for_budget",
    "compute_year_calendar",
    "efficiency",
    "efficiency_label",
    "generate_calendar",
    "get_holidays",
    "greek_holidays",
    "julian_gregorian_offset",
    "orthodox_easter",
    "validate_date_range",
]

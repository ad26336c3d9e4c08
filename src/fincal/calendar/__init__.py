"""
fincal.calendar
~~~~~~~~~~~~~~~

Business-day queries and arithmetic.  A business day is a calendar day that
is neither a configured weekend day nor a configured holiday.

Basic usage::

    from datetime import date
    from fincal.calendar import add_business_days, BusinessDayConfig, RecurringHoliday

    cfg = BusinessDayConfig(holidays=(RecurringHoliday(1, 1, "New Year"),))
    add_business_days(date(2024, 1, 5), 1, cfg)       # → date(2024, 1, 8)

Every function takes an optional config and falls back to DEFAULT_CONFIG
(the built-in holiday list, Saturday/Sunday weekends).

NumPy arrays of dates are handled by a compiled calendar::

    import numpy as np
    from fincal.calendar import BusinessCalendar

    cal  = BusinessCalendar(cfg)
    due  = np.array(["2024-01-05", "2024-01-12"], dtype="datetime64[D]")
    cal.add_business_days(due, 1)

Public API
----------
Holidays       RecurringHoliday, FixedHoliday, holiday_from_mapping, DEFAULT_HOLIDAYS
Config         BusinessDayConfig, DEFAULT_CONFIG, DEFAULT_WEEKEND_DAYS
Functions      is_weekend, is_holiday, matching_holiday, is_business_day,
               add_business_days, next_business_day, previous_business_day,
               business_days_between, adjust_to_business_day,
               format_business_day_info (→ BusinessDayInfo)
Compiled       BusinessCalendar
Errors         CalendarError, InvalidDateError
"""

from __future__ import annotations

from fincal.calendar._exceptions import CalendarError, InvalidDateError
from fincal.calendar.businessday import (
    BusinessDayInfo,
    add_business_days,
    adjust_to_business_day,
    business_days_between,
    format_business_day_info,
    is_business_day,
    is_holiday,
    is_weekend,
    matching_holiday,
    next_business_day,
    previous_business_day,
)
from fincal.calendar.calendar import BusinessCalendar
from fincal.calendar.config import DEFAULT_CONFIG, DEFAULT_WEEKEND_DAYS, BusinessDayConfig
from fincal.calendar.holidays import (
    DEFAULT_HOLIDAYS,
    FixedHoliday,
    Holiday,
    RecurringHoliday,
    holiday_from_mapping,
)

__all__ = [
    "BusinessCalendar",
    "BusinessDayConfig",
    "BusinessDayInfo",
    "CalendarError",
    "DEFAULT_CONFIG",
    "DEFAULT_HOLIDAYS",
    "DEFAULT_WEEKEND_DAYS",
    "FixedHoliday",
    "Holiday",
    "InvalidDateError",
    "RecurringHoliday",
    "add_business_days",
    "adjust_to_business_day",
    "business_days_between",
    "format_business_day_info",
    "holiday_from_mapping",
    "is_business_day",
    "is_holiday",
    "is_weekend",
    "matching_holiday",
    "next_business_day",
    "previous_business_day",
]

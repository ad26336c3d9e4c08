"""
Scalar business-day queries and arithmetic.

Every function is pure: it takes a day and a ``BusinessDayConfig`` (the
default calendar when omitted) and returns a value.  Days are compared by
their own calendar date; a ``datetime`` keeps its time-of-day and tzinfo
through arithmetic and is never converted to another zone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, TypeVar

from ._exceptions import InvalidDateError
from .config import DEFAULT_CONFIG, DEFAULT_WEEKEND_DAYS, BusinessDayConfig, weekday_index
from .holidays import DEFAULT_HOLIDAYS, Holiday

D = TypeVar("D", bound=date)

_ONE_DAY = timedelta(days=1)


def _check_day(day: Any) -> None:
    if not isinstance(day, date):
        raise InvalidDateError(f"Expected a date or datetime; got {day!r}.")


def _calendar_day(day: date) -> date:
    return day.date() if isinstance(day, datetime) else day


def _check_steps(n: Any) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidDateError(f"Business-day count must be an int; got {n!r}.")


# ── predicates ───────────────────────────────────────────────────────────────

def is_weekend(day: date, weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS) -> bool:
    _check_day(day)
    return weekday_index(day) in frozenset(weekend_days)


def matching_holiday(day: date, holidays: Iterable[Holiday] = DEFAULT_HOLIDAYS) -> Holiday | None:
    """First holiday in ``holidays`` observed on ``day``, or None."""
    _check_day(day)
    for holiday in holidays:
        if holiday.matches(day):
            return holiday
    return None


def is_holiday(day: date, holidays: Iterable[Holiday] = DEFAULT_HOLIDAYS) -> bool:
    return matching_holiday(day, holidays) is not None


def is_business_day(day: date, config: BusinessDayConfig | None = None) -> bool:
    cfg = config or DEFAULT_CONFIG
    return not is_weekend(day, cfg.weekend_days) and not is_holiday(day, cfg.holidays)


# ── arithmetic ───────────────────────────────────────────────────────────────

def add_business_days(day: D, n: int, config: BusinessDayConfig | None = None) -> D:
    """
    Move ``n`` business days from ``day`` (backwards when ``n`` is negative).

    Non-business days are stepped over without being counted, so the result
    is always a business day.  ``n == 0`` returns ``day`` itself, even when
    it is not a business day.
    """
    _check_day(day)
    _check_steps(n)
    if n == 0:
        return day

    cfg = config or DEFAULT_CONFIG
    step = _ONE_DAY if n > 0 else -_ONE_DAY
    remaining = abs(n)
    current = day
    while remaining > 0:
        current = current + step
        if is_business_day(current, cfg):
            remaining -= 1
    return current


def next_business_day(day: D, config: BusinessDayConfig | None = None) -> D:
    return add_business_days(day, 1, config)


def previous_business_day(day: D, config: BusinessDayConfig | None = None) -> D:
    return add_business_days(day, -1, config)


def business_days_between(start: date, end: date, config: BusinessDayConfig | None = None) -> int:
    """
    Business days in ``(start, end]``: the start day is never counted, the
    end day is when it is a business day.  Negative when ``start > end``.
    Datetimes count by their calendar date; time of day is ignored.
    """
    _check_day(start)
    _check_day(end)
    start, end = _calendar_day(start), _calendar_day(end)
    if start > end:
        return -business_days_between(end, start, config)

    cfg = config or DEFAULT_CONFIG
    count = 0
    current = start
    while current < end:
        current = current + _ONE_DAY
        if is_business_day(current, cfg):
            count += 1
    return count


def adjust_to_business_day(day: D, config: BusinessDayConfig | None = None) -> D:
    """``day`` if it is a business day, else the next business day after it."""
    if is_business_day(day, config):
        return day
    return next_business_day(day, config)


# ── display ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class BusinessDayInfo:
    is_business_day: bool
    reason: str | None = None
    next_business_day: date | None = None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"isBusinessDay": self.is_business_day}
        if self.reason is not None:
            out["reason"] = self.reason
        if self.next_business_day is not None:
            out["nextBusinessDay"] = self.next_business_day
        return out


def format_business_day_info(day: date, config: BusinessDayConfig | None = None) -> BusinessDayInfo:
    cfg = config or DEFAULT_CONFIG
    if is_business_day(day, cfg):
        return BusinessDayInfo(True)

    if is_weekend(day, cfg.weekend_days):
        reason = "Weekend"
    else:
        holiday = matching_holiday(day, cfg.holidays)
        reason = f"Holiday: {holiday.name}" if holiday is not None and holiday.name else "Holiday"

    return BusinessDayInfo(False, reason, next_business_day(day, cfg))

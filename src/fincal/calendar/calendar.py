from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Union

import numpy as np

from ._exceptions import CalendarError, InvalidDateError
from .config import DEFAULT_CONFIG, BusinessDayConfig
from .holidays import FixedHoliday

logger = logging.getLogger(__name__)

DateLike = Union[date, "np.datetime64"]
ArrayLike = Union[DateLike, "np.ndarray", list]

_ONE_DAY = np.timedelta64(1, "D")


def _day_of(value: Any) -> date | np.datetime64:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, (date, np.datetime64)):
        return value
    raise InvalidDateError(f"Expected a date, datetime or datetime64; got {value!r}.")


def _as_days(values: Any) -> np.ndarray:
    arr = np.asarray(values)
    if arr.dtype.kind == "M":
        days = arr.astype("datetime64[D]")
    else:
        obj = np.asarray(values, dtype=object)
        days = np.array(
            [_day_of(v) for v in obj.ravel()], dtype="datetime64[D]"
        ).reshape(obj.shape)
    if np.isnat(days).any():
        raise InvalidDateError("NaT is not a calendar date.")
    return days


def _years_of(days: np.ndarray) -> np.ndarray:
    return days.astype("datetime64[Y]").astype(np.int64) + 1970


class BusinessCalendar:
    """
    Compiled business-day calendar backed by ``numpy.busdaycalendar``.

    Recurring holidays are expanded into concrete dates for a covered range
    of years.  The range grows automatically whenever a query or a result
    falls outside it, so answers never depend on the initial range.
    """

    _DEFAULT_BUFFER: int = 3

    def __init__(
        self,
        config: BusinessDayConfig | None = None,
        years: tuple[int, int] | None = None,
    ) -> None:
        self._config: BusinessDayConfig = config or DEFAULT_CONFIG

        # numpy weekmasks run Monday..Sunday; weekend indices are Sunday-based.
        self._weekmask: np.ndarray = np.array(
            [((k + 1) % 7) not in self._config.weekend_days for k in range(7)],
            dtype=bool,
        )

        if years is None:
            this_year = date.today().year
            years = (this_year - self._DEFAULT_BUFFER, this_year + self._DEFAULT_BUFFER)
        first, last = int(years[0]), int(years[1])
        if first > last:
            raise CalendarError(f"Year range is empty: {first}..{last}.")
        self._first_year: int = first
        self._last_year: int = last

        self._build()

    # ── holiday expansion ────────────────────────────────────────────────

    def _build(self) -> None:
        dates: set[date] = set()
        for holiday in self._config.holidays:
            if isinstance(holiday, FixedHoliday):
                dates.add(holiday.occurrence(holiday.date.year))
                continue
            for year in range(self._first_year, self._last_year + 1):
                d = holiday.occurrence(year)
                if d is not None:
                    dates.add(d)

        self._holiday_dates: np.ndarray = np.array(sorted(dates), dtype="datetime64[D]")
        self._busdaycal = np.busdaycalendar(
            weekmask=self._weekmask, holidays=self._holiday_dates
        )
        logger.debug(
            "Compiled business calendar for %d..%d with %d holiday dates",
            self._first_year, self._last_year, len(self._holiday_dates),
        )

    def _extend_to(self, first: int, last: int) -> None:
        logger.debug(
            "Extending business calendar from %d..%d to %d..%d",
            self._first_year, self._last_year, first, last,
        )
        self._first_year = first
        self._last_year = last
        self._build()

    def _covers(self, days: np.ndarray) -> bool:
        if days.size == 0:
            return True
        years = _years_of(days)
        return bool(years.min() >= self._first_year and years.max() <= self._last_year)

    def _ensure_years(self, days: np.ndarray) -> None:
        if self._covers(days):
            return
        years = _years_of(days)
        self._extend_to(
            min(int(years.min()) - self._DEFAULT_BUFFER, self._first_year),
            max(int(years.max()) + self._DEFAULT_BUFFER, self._last_year),
        )

    # ── backends ─────────────────────────────────────────────────────────

    def _offset(self, days: np.ndarray, steps: np.ndarray) -> np.ndarray:
        self._ensure_years(days)
        while True:
            # Rolling against the direction of travel keeps the walk exact:
            # no business day lies between the input and the rolled date.
            forward = np.busday_offset(days, steps, roll="backward", busdaycal=self._busdaycal)
            backward = np.busday_offset(days, steps, roll="forward", busdaycal=self._busdaycal)
            result = np.where(steps > 0, forward, np.where(steps < 0, backward, days))
            if self._covers(result):
                return result
            self._ensure_years(result)

    # ── public API ───────────────────────────────────────────────────────

    def is_business_day(self, day: ArrayLike) -> bool | np.ndarray:
        scalar = np.ndim(day) == 0
        days = _as_days(day)
        self._ensure_years(days)
        result = np.is_busday(days, busdaycal=self._busdaycal)
        return bool(result) if scalar else result

    def add_business_days(self, day: ArrayLike, n: int | np.ndarray) -> date | np.ndarray:
        scalar = np.ndim(day) == 0 and np.ndim(n) == 0
        steps = np.asarray(n)
        if steps.dtype.kind not in "iu":
            raise InvalidDateError(f"Business-day count must be integral; got {n!r}.")
        days, steps = np.broadcast_arrays(_as_days(day), steps.astype(np.int64))
        result = self._offset(days, steps)
        return result.item() if scalar else result

    def business_days_between(self, start: ArrayLike, end: ArrayLike) -> int | np.ndarray:
        scalar = np.ndim(start) == 0 and np.ndim(end) == 0
        s, e = np.broadcast_arrays(_as_days(start), _as_days(end))
        # Count (lo, hi] on the ordered pair; busday_count counts [begin, end).
        lo, hi = np.minimum(s, e), np.maximum(s, e)
        self._ensure_years(np.concatenate([lo.ravel(), (hi + _ONE_DAY).ravel()]))
        count = np.busday_count(lo + _ONE_DAY, hi + _ONE_DAY, busdaycal=self._busdaycal)
        result = np.where(s > e, -count, count)
        return int(result) if scalar else result

    def adjust_to_business_day(self, day: ArrayLike) -> date | np.ndarray:
        scalar = np.ndim(day) == 0
        days = _as_days(day)
        self._ensure_years(days)
        open_ = np.is_busday(days, busdaycal=self._busdaycal)
        nxt = self._offset(days, np.ones(days.shape, dtype=np.int64))
        result = np.where(open_, days, nxt)
        return result.item() if scalar else result

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def config(self) -> BusinessDayConfig:
        return self._config

    @property
    def years(self) -> tuple[int, int]:
        return self._first_year, self._last_year

    @property
    def holiday_dates(self) -> np.ndarray:
        return self._holiday_dates.copy()

    def __repr__(self) -> str:
        return (
            f"BusinessCalendar(weekmask={self._weekmask.astype(int).tolist()}, "
            f"years={self._first_year}..{self._last_year}, "
            f"holidays={len(self._config.holidays)}, "
            f"holiday_dates={len(self._holiday_dates)})"
        )

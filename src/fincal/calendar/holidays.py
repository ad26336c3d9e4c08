from __future__ import annotations

import calendar as _stdcal
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Union

from ._exceptions import CalendarError


@dataclass(frozen=True, slots=True)
class RecurringHoliday:
    """
    Holiday observed every year on the same month/day.

    A Feb 29 holiday is only observed in leap years.
    """

    month: int
    day: int
    name: str

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise CalendarError(f"Holiday month must be in 1..12; got {self.month}.")
        # 2000 is a leap year, so Feb 29 is accepted here.
        if not 1 <= self.day <= _stdcal.monthrange(2000, self.month)[1]:
            raise CalendarError(
                f"Holiday day {self.day} is out of range for month {self.month}."
            )

    def matches(self, day: date) -> bool:
        return day.month == self.month and day.day == self.day

    def occurrence(self, year: int) -> date | None:
        """The holiday's date in ``year``, or None if it does not occur."""
        if self.month == 2 and self.day == 29 and not _stdcal.isleap(year):
            return None
        return date(year, self.month, self.day)


@dataclass(frozen=True, slots=True)
class FixedHoliday:
    """Holiday observed on one calendar date only."""

    date: date
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.date, date):
            raise CalendarError(f"Fixed holiday needs a date; got {self.date!r}.")

    def matches(self, day: date) -> bool:
        return (day.year, day.month, day.day) == (
            self.date.year, self.date.month, self.date.day
        )

    def occurrence(self, year: int) -> date | None:
        return date(self.date.year, self.date.month, self.date.day) if self.date.year == year else None


Holiday = Union[RecurringHoliday, FixedHoliday]


def holiday_from_mapping(data: Mapping[str, Any]) -> Holiday:
    """
    Build a holiday from its stored form::

        {"date": "2024-01-26", "name": "Republic Day", "recurring": True}

    ``recurring`` defaults to False.  A recurring holiday keeps only the
    month and day of ``date``.
    """
    try:
        raw, name = data["date"], data["name"]
    except KeyError as exc:
        raise CalendarError(f"Holiday mapping is missing {exc.args[0]!r}.") from exc

    if isinstance(raw, date):
        anchor = raw
    else:
        try:
            anchor = date.fromisoformat(str(raw))
        except ValueError as exc:
            raise CalendarError(f"Invalid holiday date {raw!r}.") from exc

    if data.get("recurring", False):
        return RecurringHoliday(anchor.month, anchor.day, str(name))
    return FixedHoliday(anchor, str(name))


def coerce_holidays(holidays: Iterable[Holiday | Mapping[str, Any]]) -> tuple[Holiday, ...]:
    out: list[Holiday] = []
    for h in holidays:
        if isinstance(h, (RecurringHoliday, FixedHoliday)):
            out.append(h)
        elif isinstance(h, Mapping):
            out.append(holiday_from_mapping(h))
        else:
            raise CalendarError(f"Not a holiday: {h!r}.")
    return tuple(out)


DEFAULT_HOLIDAYS: tuple[Holiday, ...] = (
    RecurringHoliday(1, 1, "New Year"),
    RecurringHoliday(1, 26, "Republic Day"),
    RecurringHoliday(8, 15, "Independence Day"),
    RecurringHoliday(10, 2, "Gandhi Jayanti"),
    RecurringHoliday(12, 25, "Christmas"),
)

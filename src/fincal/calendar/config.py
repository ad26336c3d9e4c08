from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ._exceptions import CalendarError
from .holidays import DEFAULT_HOLIDAYS, Holiday, coerce_holidays

# Weekday indices run 0=Sunday .. 6=Saturday.
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DEFAULT_WEEKEND_DAYS: frozenset[int] = frozenset({SUNDAY, SATURDAY})


def weekday_index(day: Any) -> int:
    """Sunday-based weekday index of a date (``date.weekday()`` is Monday-based)."""
    return (day.weekday() + 1) % 7


def _check_weekend_days(days: Iterable[int]) -> frozenset[int]:
    out = frozenset(days)
    for d in out:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
            raise CalendarError(f"Weekend day must be an int in 0..6; got {d!r}.")
    if len(out) == 7:
        raise CalendarError("Every weekday is a weekend day; no business day can exist.")
    return out


@dataclass(frozen=True, slots=True)
class BusinessDayConfig:
    """
    Evaluation policy for business-day queries.

    holidays      Holidays to skip.  Matching uses set semantics; order only
                  decides which name is reported when several match.
    weekend_days  Weekday indices (0=Sunday .. 6=Saturday) that are never
                  business days.
    """

    holidays: tuple[Holiday, ...] = DEFAULT_HOLIDAYS
    weekend_days: frozenset[int] = field(default=DEFAULT_WEEKEND_DAYS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "holidays", coerce_holidays(self.holidays))
        object.__setattr__(self, "weekend_days", _check_weekend_days(self.weekend_days))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BusinessDayConfig":
        """
        Build a config from stored settings.  Both ``customWeekendDays`` and
        ``weekend_days`` are understood; missing keys fall back to the
        defaults, as do keys set to None.
        """
        holidays = data.get("holidays")
        if holidays is None:
            holidays = DEFAULT_HOLIDAYS
        weekend = data.get("customWeekendDays")
        if weekend is None:
            weekend = data.get("weekend_days")
        if weekend is None:
            weekend = DEFAULT_WEEKEND_DAYS
        try:
            return cls(holidays=tuple(holidays), weekend_days=frozenset(weekend))
        except TypeError as exc:
            raise CalendarError(f"Invalid business-day settings: {exc}") from exc


DEFAULT_CONFIG = BusinessDayConfig()

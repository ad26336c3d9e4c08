from __future__ import annotations

import calendar as _stdcal
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, TypeVar

from fincal.calendar import BusinessDayConfig, adjust_to_business_day, is_business_day

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=date)

DEFAULT_REMINDER_DAYS: tuple[int, ...] = (1, 3, 7, 14)


class Frequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


_MONTHS: dict[Frequency, int] = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}


def _add_months(day: D, months: int) -> D:
    # Clamp to the last day of a shorter target month (Jan 31 → Feb 28/29).
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last = _stdcal.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last))


def next_due_date(current: D, frequency: Frequency | str) -> D:
    """Due date one billing period after ``current``."""
    try:
        freq = Frequency(frequency)
    except ValueError:
        raise ValueError(f"Unsupported frequency: {frequency!r}") from None

    if freq is Frequency.WEEKLY:
        return current + timedelta(days=7)
    return _add_months(current, _MONTHS[freq])


@dataclass(frozen=True, slots=True)
class Bill:
    id: str
    name: str
    next_due_date: date
    frequency: Frequency
    is_active: bool = True
    amount: Decimal = Decimal("0")
    account_name: str = ""
    reminder_days: str = ",".join(str(d) for d in DEFAULT_REMINDER_DAYS)

    def rolled_forward(self) -> "Bill":
        """Copy of the bill with its due date advanced by one period."""
        return replace(self, next_due_date=next_due_date(self.next_due_date, self.frequency))


@dataclass(frozen=True, slots=True)
class DueDateAdjustment:
    bills: tuple[Bill, ...]
    adjusted_count: int


def adjust_due_dates(
    bills: Iterable[Bill],
    config: BusinessDayConfig | None = None,
) -> DueDateAdjustment:
    """
    Move the due date of every active bill that falls on a non-business day
    to the next business day.  Inactive bills pass through untouched and the
    input order is kept.
    """
    out: list[Bill] = []
    adjusted = 0
    for bill in bills:
        if bill.is_active and not is_business_day(bill.next_due_date, config):
            moved = adjust_to_business_day(bill.next_due_date, config)
            logger.debug(
                "Bill %s due %s moved to %s", bill.id, bill.next_due_date, moved
            )
            bill = replace(bill, next_due_date=moved)
            adjusted += 1
        out.append(bill)

    logger.info("Adjusted %d of %d bill due dates to business days", adjusted, len(out))
    return DueDateAdjustment(tuple(out), adjusted)


def parse_reminder_days(value: str) -> list[int]:
    """
    Parse a comma-separated list of reminder lead times in days.

    Non-numeric and non-positive entries are dropped; the result is sorted.
    """
    days: list[int] = []
    for part in value.split(","):
        try:
            n = int(part.strip())
        except ValueError:
            continue
        if n > 0:
            days.append(n)
    return sorted(days)


# ── reminders ────────────────────────────────────────────────────────────────

REMINDER_TYPES: dict[int, str] = {
    1: "bill_reminder_1_day",
    3: "bill_reminder_3_day",
    7: "bill_reminder_7_day",
    14: "bill_reminder_14_day",
}


@dataclass(frozen=True, slots=True)
class BillReminder:
    bill: Bill
    days_until_due: int
    reminder_type: str
    message: str

    @property
    def is_overdue(self) -> bool:
        return self.days_until_due < 0


def _calendar_day(day: date) -> date:
    return day.date() if isinstance(day, datetime) else day


def days_until_due(bill: Bill, today: date) -> int:
    """Calendar days from ``today`` to the bill's due date; negative once overdue."""
    return (_calendar_day(bill.next_due_date) - _calendar_day(today)).days


def reminder_message(bill: Bill, days: int) -> str:
    amount = f"₹{bill.amount:.2f}"
    source = f" from {bill.account_name}" if bill.account_name else ""
    if days == 0:
        return f"{bill.name} is due today. Amount: {amount}{source}"
    if days == 1:
        return f"{bill.name} is due tomorrow. Amount: {amount}{source}"
    if days > 1:
        return f"{bill.name} is due in {days} days. Amount: {amount}{source}"
    return f"{bill.name} is {abs(days)} day(s) overdue. Amount: {amount}{source}"


def due_reminders(bills: Iterable[Bill], today: date, lookahead_days: int = 14) -> list[BillReminder]:
    """
    Reminders that fire on ``today``.

    An active bill due within ``lookahead_days`` fires when the days left
    equal one of its reminder lead times and that lead time has a reminder
    type.  Overdue bills are reported by ``overdue_reminders``.
    """
    out: list[BillReminder] = []
    for bill in bills:
        if not bill.is_active:
            continue
        days = days_until_due(bill, today)
        if not 0 <= days <= lookahead_days:
            continue
        if days in parse_reminder_days(bill.reminder_days) and days in REMINDER_TYPES:
            out.append(BillReminder(bill, days, REMINDER_TYPES[days], reminder_message(bill, days)))
    logger.debug("%d bill reminders due on %s", len(out), today)
    return out


def overdue_reminders(bills: Iterable[Bill], today: date) -> list[BillReminder]:
    """A reminder for every active bill whose due date is before ``today``."""
    out: list[BillReminder] = []
    for bill in bills:
        days = days_until_due(bill, today)
        if bill.is_active and days < 0:
            out.append(BillReminder(bill, days, REMINDER_TYPES[1], reminder_message(bill, days)))
    return out

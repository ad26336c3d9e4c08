"""
fincal.bills
~~~~~~~~~~~~

Due-date scheduling for recurring bills.

A bill's next due date rolls forward by its frequency once paid.  Due dates
that land on a weekend or holiday can be moved to the next business day::

    from datetime import date
    from fincal.bills import Bill, Frequency, adjust_due_dates

    bills = [Bill("b1", "Rent", date(2024, 1, 6), Frequency.MONTHLY)]
    outcome = adjust_due_dates(bills)
    outcome.adjusted_count                      # → 1
    outcome.bills[0].next_due_date              # → date(2024, 1, 8)
"""

from fincal.bills.bills import (
    DEFAULT_REMINDER_DAYS,
    REMINDER_TYPES,
    Bill,
    BillReminder,
    DueDateAdjustment,
    Frequency,
    adjust_due_dates,
    days_until_due,
    due_reminders,
    next_due_date,
    overdue_reminders,
    parse_reminder_days,
    reminder_message,
)

__all__ = [
    "DEFAULT_REMINDER_DAYS",
    "REMINDER_TYPES",
    "Bill",
    "BillReminder",
    "DueDateAdjustment",
    "Frequency",
    "adjust_due_dates",
    "days_until_due",
    "due_reminders",
    "next_due_date",
    "overdue_reminders",
    "parse_reminder_days",
    "reminder_message",
]

"""
tests/bills/test_bills.py

Covers:
  - Rolling due dates forward by frequency (month-end clamping)
  - Moving due dates off weekends and holidays
  - Reminder lead-time parsing
  - Which reminders fire on a given day, overdue bills, message wording
"""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from fincal.bills import (
    REMINDER_TYPES,
    Bill,
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
from fincal.calendar import BusinessDayConfig, FixedHoliday


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def bills():
    return [
        Bill("b1", "Rent", date(2024, 1, 6), Frequency.MONTHLY),                 # Saturday
        Bill("b2", "Phone", date(2024, 1, 8), Frequency.MONTHLY),                # Monday
        Bill("b3", "Gym", date(2024, 1, 7), Frequency.WEEKLY, is_active=False),  # Sunday
        Bill("b4", "Insurance", date(2024, 1, 26), Frequency.YEARLY),            # Republic Day
    ]


# ── next_due_date ─────────────────────────────────────────────────────────────

class TestNextDueDate:

    def test_weekly(self):
        assert next_due_date(date(2024, 1, 5), Frequency.WEEKLY) == date(2024, 1, 12)

    def test_monthly(self):
        assert next_due_date(date(2024, 1, 15), Frequency.MONTHLY) == date(2024, 2, 15)

    def test_monthly_over_year_end(self):
        assert next_due_date(date(2024, 12, 15), Frequency.MONTHLY) == date(2025, 1, 15)

    def test_monthly_clamps_to_month_end(self):
        assert next_due_date(date(2024, 1, 31), Frequency.MONTHLY) == date(2024, 2, 29)
        assert next_due_date(date(2023, 1, 31), Frequency.MONTHLY) == date(2023, 2, 28)

    def test_quarterly(self):
        assert next_due_date(date(2024, 11, 30), Frequency.QUARTERLY) == date(2025, 2, 28)
        assert next_due_date(date(2024, 1, 10), Frequency.QUARTERLY) == date(2024, 4, 10)

    def test_yearly_from_leap_day(self):
        assert next_due_date(date(2024, 2, 29), Frequency.YEARLY) == date(2025, 2, 28)

    def test_string_frequency(self):
        assert next_due_date(date(2024, 1, 15), "monthly") == date(2024, 2, 15)

    def test_unknown_frequency_raises(self):
        with pytest.raises(ValueError, match="Unsupported frequency"):
            next_due_date(date(2024, 1, 15), "daily")

    def test_bill_rolled_forward(self, bills):
        rolled = bills[1].rolled_forward()
        assert rolled.next_due_date == date(2024, 2, 8)
        assert rolled.id == "b2"
        assert bills[1].next_due_date == date(2024, 1, 8)


# ── adjust_due_dates ──────────────────────────────────────────────────────────

class TestAdjustDueDates:

    def test_default_calendar(self, bills):
        outcome = adjust_due_dates(bills)
        assert isinstance(outcome, DueDateAdjustment)
        assert outcome.adjusted_count == 2
        assert [b.next_due_date for b in outcome.bills] == [
            date(2024, 1, 8),
            date(2024, 1, 8),
            date(2024, 1, 7),
            date(2024, 1, 29),
        ]

    def test_order_and_identity_preserved(self, bills):
        outcome = adjust_due_dates(bills)
        assert [b.id for b in outcome.bills] == ["b1", "b2", "b3", "b4"]
        assert outcome.bills[1] is bills[1]
        assert outcome.bills[2] is bills[2]

    def test_inactive_bills_untouched(self, bills):
        outcome = adjust_due_dates(bills)
        assert outcome.bills[2].next_due_date == date(2024, 1, 7)

    def test_custom_config(self, bills):
        cfg = BusinessDayConfig(holidays=(FixedHoliday(date(2024, 1, 8), "Office closed"),))
        outcome = adjust_due_dates(bills, cfg)
        # Saturday and Monday both land on Tuesday; Republic Day is now a normal Friday.
        assert [b.next_due_date for b in outcome.bills] == [
            date(2024, 1, 9),
            date(2024, 1, 9),
            date(2024, 1, 7),
            date(2024, 1, 26),
        ]
        assert outcome.adjusted_count == 2

    def test_empty(self):
        outcome = adjust_due_dates([])
        assert outcome == DueDateAdjustment((), 0)

    def test_logs_summary(self, bills, caplog):
        with caplog.at_level(logging.INFO, logger="fincal.bills.bills"):
            adjust_due_dates(bills)
        assert "Adjusted 2 of 4 bill due dates" in caplog.text


# ── parse_reminder_days ───────────────────────────────────────────────────────

class TestParseReminderDays:

    def test_sorted_and_filtered(self):
        assert parse_reminder_days("7, 3,x,-1,1") == [1, 3, 7]

    def test_empty(self):
        assert parse_reminder_days("") == []

    def test_zero_dropped(self):
        assert parse_reminder_days("0,14") == [14]


# ── Reminders ─────────────────────────────────────────────────────────────────

TODAY = date(2024, 3, 1)


def _bill(bill_id, due, **kwargs):
    kwargs.setdefault("amount", Decimal("1200"))
    kwargs.setdefault("account_name", "Savings")
    return Bill(bill_id, f"Bill {bill_id}", due, Frequency.MONTHLY, **kwargs)


class TestReminderMessage:

    @pytest.fixture
    def rent(self):
        return Bill("r", "Rent", TODAY, Frequency.MONTHLY,
                    amount=Decimal("15000.5"), account_name="HDFC Savings")

    def test_due_today(self, rent):
        assert reminder_message(rent, 0) == "Rent is due today. Amount: ₹15000.50 from HDFC Savings"

    def test_due_tomorrow(self, rent):
        assert reminder_message(rent, 1) == "Rent is due tomorrow. Amount: ₹15000.50 from HDFC Savings"

    def test_due_in_days(self, rent):
        assert reminder_message(rent, 7) == "Rent is due in 7 days. Amount: ₹15000.50 from HDFC Savings"

    def test_overdue(self, rent):
        assert reminder_message(rent, -3) == "Rent is 3 day(s) overdue. Amount: ₹15000.50 from HDFC Savings"

    def test_without_account(self):
        bill = Bill("p", "Phone", TODAY, Frequency.MONTHLY, amount=Decimal("499"))
        assert reminder_message(bill, 3) == "Phone is due in 3 days. Amount: ₹499.00"


class TestDueReminders:

    def test_days_until_due(self):
        assert days_until_due(_bill("a", date(2024, 3, 8)), TODAY) == 7
        assert days_until_due(_bill("a", date(2024, 2, 27)), TODAY) == -3
        assert days_until_due(_bill("a", date(2024, 3, 2)), datetime(2024, 3, 1, 23, 30)) == 1

    def test_fires_on_default_lead_times(self):
        bills = [_bill(str(n), date(2024, 3, 1 + n)) for n in range(0, 16)]
        fired = due_reminders(bills, TODAY)
        assert [r.days_until_due for r in fired] == [1, 3, 7, 14]
        assert [r.reminder_type for r in fired] == [REMINDER_TYPES[n] for n in (1, 3, 7, 14)]
        assert not any(r.is_overdue for r in fired)

    def test_message_attached(self):
        (reminder,) = due_reminders([_bill("a", date(2024, 3, 2))], TODAY)
        assert reminder.message == "Bill a is due tomorrow. Amount: ₹1200.00 from Savings"

    def test_custom_reminder_days(self):
        bills = [
            _bill("a", date(2024, 3, 4), reminder_days="3"),
            _bill("b", date(2024, 3, 8), reminder_days="3"),
        ]
        assert [r.bill.id for r in due_reminders(bills, TODAY)] == ["a"]

    def test_lead_time_without_type_ignored(self):
        bills = [_bill("a", date(2024, 3, 6), reminder_days="5")]
        assert due_reminders(bills, TODAY) == []

    def test_beyond_lookahead_ignored(self):
        bills = [_bill("a", date(2024, 3, 15))]
        assert due_reminders(bills, TODAY, lookahead_days=7) == []
        assert len(due_reminders(bills, TODAY)) == 1

    def test_inactive_and_overdue_skipped(self):
        bills = [
            _bill("a", date(2024, 3, 2), is_active=False),
            _bill("b", date(2024, 2, 29)),
        ]
        assert due_reminders(bills, TODAY) == []


class TestOverdueReminders:

    def test_overdue_bills_reported(self):
        bills = [
            _bill("a", date(2024, 2, 27)),
            _bill("b", date(2024, 3, 1)),
            _bill("c", date(2024, 2, 20), is_active=False),
        ]
        (reminder,) = overdue_reminders(bills, TODAY)
        assert reminder.bill.id == "a"
        assert reminder.days_until_due == -3
        assert reminder.is_overdue
        assert reminder.reminder_type == "bill_reminder_1_day"
        assert reminder.message == "Bill a is 3 day(s) overdue. Amount: ₹1200.00 from Savings"

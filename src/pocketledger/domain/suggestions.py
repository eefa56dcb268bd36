"""Spending suggestions derived from the available balance."""

import calendar
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from pocketledger.domain.entities import Suggestions

EMERGENCY_RESERVE_RATE = Decimal("0.2")
DAYS_PER_WEEK = 7
CENTS = Decimal("0.01")


def remaining_days_in_month(today: date) -> int:
    """Days left in the month of ``today``, counting today itself."""
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    return max(1, days_in_month - today.day + 1)


def _money(value: Decimal) -> Decimal:
    return max(Decimal("0"), value).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_suggestions(available_balance: Decimal, today: Optional[date] = None) -> Suggestions:
    """Split the available balance over the rest of the month.

    20% of the balance is held back as an emergency reserve and the rest is
    spread evenly over the remaining days. Money outputs never go below
    zero and are rounded to cents only after all arithmetic is done.

    Args:
        available_balance: Total bank balance minus pending expenses and taxes
        today: Reference date (defaults to the current date)

    Returns:
        Suggestions for the remaining days of the month
    """
    if today is None:
        today = date.today()
    available_balance = Decimal(available_balance)

    remaining_days = remaining_days_in_month(today)
    emergency_reserve = available_balance * EMERGENCY_RESERVE_RATE
    spendable = available_balance - emergency_reserve
    daily = spendable / remaining_days
    weekly = daily * DAYS_PER_WEEK

    return Suggestions(
        daily_suggestion=_money(daily),
        weekly_suggestion=_money(weekly),
        emergency_reserve=_money(emergency_reserve),
        spendable=_money(spendable),
        remaining_days=remaining_days,
    )

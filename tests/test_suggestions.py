"""Tests for spending suggestions."""

from datetime import date
from decimal import Decimal
import pytest

from conftest import FIXED_TODAY
from pocketledger.domain.suggestions import compute_suggestions, remaining_days_in_month


def test_suggestions_for_1000_with_ten_days_left():
    """Test the reference split: 20% reserve, the rest over the remaining days."""
    suggestions = compute_suggestions(Decimal("1000"), FIXED_TODAY)

    assert suggestions.remaining_days == 10
    assert suggestions.emergency_reserve == Decimal("200.00")
    assert suggestions.spendable == Decimal("800.00")
    assert suggestions.daily_suggestion == Decimal("80.00")
    assert suggestions.weekly_suggestion == Decimal("560.00")


def test_suggestions_round_only_at_the_end():
    """Test weekly is computed from the unrounded daily value."""
    suggestions = compute_suggestions(Decimal("100"), date(2026, 9, 28))

    assert suggestions.remaining_days == 3
    assert suggestions.daily_suggestion == Decimal("26.67")
    assert suggestions.weekly_suggestion == Decimal("186.67")


@pytest.mark.parametrize("balance", [Decimal("0"), Decimal("-250.75")])
def test_suggestions_never_negative(balance):
    suggestions = compute_suggestions(balance, FIXED_TODAY)

    assert suggestions.daily_suggestion == Decimal("0")
    assert suggestions.weekly_suggestion == Decimal("0")
    assert suggestions.emergency_reserve == Decimal("0")
    assert suggestions.spendable == Decimal("0")


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2026, 9, 30), 1),
        (date(2026, 9, 1), 30),
        (date(2026, 2, 1), 28),
        (date(2028, 2, 1), 29),
        (date(2026, 12, 31), 1),
    ],
)
def test_remaining_days_in_month(today, expected):
    assert remaining_days_in_month(today) == expected


def test_last_day_of_month_gets_whole_spendable():
    suggestions = compute_suggestions(Decimal("50"), date(2026, 1, 31))
    assert suggestions.remaining_days == 1
    assert suggestions.daily_suggestion == Decimal("40.00")


def test_ledger_suggestions_use_service_clock(ledger):
    """Test the service passes its clock and accepts text amounts."""
    suggestions = ledger.compute_suggestions("1.000,00")
    assert suggestions.remaining_days == 10
    assert suggestions.daily_suggestion == Decimal("80.00")

"""Tests for presentation formatters."""

from datetime import date
from decimal import Decimal

from pocketledger.utils.formatters import format_currency, format_date


def test_format_currency():
    assert format_currency(Decimal("1234.56")) == "R$ 1.234,56"
    assert format_currency(Decimal("0")) == "R$ 0,00"
    assert format_currency(Decimal("1000000")) == "R$ 1.000.000,00"


def test_format_currency_negative():
    assert format_currency(Decimal("-300")) == "-R$ 300,00"


def test_format_currency_rounds_half_up():
    assert format_currency(Decimal("0.005")) == "R$ 0,01"


def test_format_date():
    assert format_date(date(2026, 9, 5)) == "05/09/2026"

"""Presentation helpers for pt-BR currency and dates."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def format_currency(amount: Decimal) -> str:
    """Format an amount as Brazilian reais, e.g. ``R$ 1.234,56``."""
    amount = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    # Format with US separators, then swap them
    text = f"{abs(amount):,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_date(value: date) -> str:
    """Format a date as ``dd/mm/yyyy``."""
    return value.strftime("%d/%m/%Y")


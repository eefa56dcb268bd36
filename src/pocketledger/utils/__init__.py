"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import parse_date
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.formatters import format_currency, format_date

__all__ = ["parse_date", "parse_amount", "format_currency", "format_date"]

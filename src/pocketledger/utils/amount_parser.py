"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "R$ 123,45" / "$123.45"
    - "-123.45"
    - "1.234,56" (comma as decimal separator)
    - "1,234.56" (comma as thousands separator)
    - "(123.45)" (negative in parentheses)

    A single comma with no dot is read as the decimal separator, the way
    amounts are typed in BRL. Dots in groups of three are thousands
    separators when there are several of them ("1.234.567") or the amount
    is prefixed with R$ ("R$ 1.000"); otherwise a lone dot is decimal.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    is_brl = "R$" in amount_str

    # Remove currency symbols
    amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(" ", "").replace("\u00a0", "")

    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif re.fullmatch(r"-?\d{1,3}(\.\d{3})+", amount_str) and (is_brl or amount_str.count(".") > 1):
        # Dots grouping thousands: "1.234.567", "R$ 1.000"
        amount_str = amount_str.replace(".", "")
    elif amount_str.count(",") == 1:
        amount_str = amount_str.replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    if is_negative:
        amount = -amount
    return amount

"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# Currency markers stripped before parsing
_CURRENCY_RE = re.compile(r"(?i)(rs\.?|inr|usd|eur|[$€£¥₹])")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45", "Rs. 123.45", "$123.45"
    - "-123.45"
    - "1,234.56" and "1,23,456.00"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    cleaned = _CURRENCY_RE.sub("", amount_str).replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount

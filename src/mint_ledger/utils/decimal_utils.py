"""Decimal utilities for transaction amounts.

All monetary calculations must use Decimal to avoid floating-point precision issues.
"""

import re
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


# Currency symbols to strip
CURRENCY_SYMBOLS = {"$", "€", "£", "¥"}

# Regex for parentheses-enclosed negatives: ($1,234.56) or (1234.56)
PARENS_NEGATIVE_PATTERN = re.compile(r"^\s*\(\s*([^)]+)\s*\)\s*$")

# Thousands separators must sit between groups of three digits
THOUSANDS_PATTERN = re.compile(r"[0-9]{1,3}(,[0-9]{3})+(\.[0-9]*)?")

# Unsigned digits with an optional fractional part; no exponents or underscores
NUMBER_PATTERN = re.compile(r"[0-9]+(\.[0-9]*)?|\.[0-9]+")


def parse_amount(raw_amount: str) -> Decimal:
    """Parse a raw amount string into a signed Decimal.

    Handles:
    - Plain: 17.39, -500.00, +12
    - With currency: $1,234.56, -$1,234.56
    - Parentheses for negative: ($1,234.56), (12.50)

    Args:
        raw_amount: The raw amount string to parse.

    Returns:
        Signed amount as Decimal.

    Raises:
        ValueError: If the amount is not a plain decimal number with at most one sign.
    """
    if not raw_amount:
        raise ValueError("Empty amount string")

    original = raw_amount
    amount_str = raw_amount.strip()
    is_negative = False

    parens_match = PARENS_NEGATIVE_PATTERN.match(amount_str)
    if parens_match:
        amount_str = parens_match.group(1).strip()
        is_negative = True

    if amount_str[:1] in ("-", "+"):
        if parens_match:
            raise ValueError(f"Cannot parse amount '{original}': sign inside parentheses")
        is_negative = amount_str[0] == "-"
        amount_str = amount_str[1:]

    if amount_str[:1] in CURRENCY_SYMBOLS:
        amount_str = amount_str[1:]

    if "," in amount_str:
        if not THOUSANDS_PATTERN.fullmatch(amount_str):
            raise ValueError(f"Cannot parse amount '{original}': misplaced separator")
        amount_str = amount_str.replace(",", "")

    # Decimal also accepts "NaN", "1e5", "1_000" and inner whitespace
    if not NUMBER_PATTERN.fullmatch(amount_str):
        raise ValueError(f"Cannot parse amount '{original}': not a plain number")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Cannot parse amount '{original}': {e}") from e

    return -amount if is_negative else amount


def format_currency(
    amount: Decimal,
    decimal_places: int = 2,
    include_sign: bool = True,
) -> str:
    """Format a Decimal amount for display.

    Args:
        amount: The amount to format.
        decimal_places: Number of decimal places (default 2).
        include_sign: Whether to include sign for negative amounts.

    Returns:
        Formatted string like "-1234.56" or "1234.56".
    """
    quantize_str = "1." + "0" * decimal_places if decimal_places else "1"
    rounded = amount.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)

    if include_sign and rounded < 0:
        return str(rounded)
    return str(abs(rounded))


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum Decimal amounts, starting from an exact Decimal zero.

    Args:
        amounts: Decimal amounts.

    Returns:
        Sum as Decimal.
    """
    total = Decimal("0")
    for amount in amounts:
        total += amount
    return total

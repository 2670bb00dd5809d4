"""Sanitization for spreadsheet-bound report cells."""

from typing import Optional


# A cell starting with one of these is evaluated as a formula by spreadsheet apps.
# Mint descriptions such as "-Transfer to savings" or "@Home" hit this.
_FORMULA_CHARS = ("=", "+", "-", "@", "\t", "\r", "\n", "|")


def sanitize_cell(value: Optional[str]) -> Optional[str]:
    """Neutralise a text cell before it is written to CSV or Excel.

    Values beginning with a formula-triggering character are prefixed
    with a single quote (the OWASP CSV-injection mitigation).

    Args:
        value: Text to sanitize, or None.

    Returns:
        Sanitized text, or None if input was None.
    """
    if not value:
        return value

    if value.startswith(_FORMULA_CHARS):
        return "'" + value

    return value

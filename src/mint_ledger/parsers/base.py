"""Errors raised while turning a Mint export into transactions."""

from pathlib import Path
from typing import Optional


class ParseError(Exception):
    """Exception raised when parsing fails."""

    def __init__(self, message: str, file_path: Optional[Path] = None):
        """Initialize ParseError.

        Args:
            message: Error message.
            file_path: Optional path to the file that failed to parse.
        """
        self.file_path = file_path
        super().__init__(message)


class MalformedRecord(ParseError):
    """A raw record whose Amount or Date cannot be parsed.

    Attributes:
        field: Name of the offending field.
        value: The raw value (None if the field was missing).
        record: The raw record being parsed.
    """

    def __init__(
        self,
        message: str,
        field: str,
        value: Optional[str] = None,
        record: Optional[dict[str, str]] = None,
    ):
        self.field = field
        self.value = value
        self.record = record
        super().__init__(message)

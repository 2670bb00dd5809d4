"""Reader for Mint ``transactions.csv`` exports."""

import csv
from pathlib import Path

from mint_ledger.models.transaction import RawRecord
from mint_ledger.parsers.base import ParseError
from mint_ledger.utils.logging_config import get_logger

logger = get_logger(__name__)

# Maximum CSV file size to prevent memory exhaustion (50 MB)
MAX_CSV_FILE_SIZE = 50 * 1024 * 1024

# Maximum number of rows to prevent memory exhaustion from many small rows
MAX_CSV_ROWS = 500_000


def read_records(file_path: Path, delimiter: str = ",") -> list[RawRecord]:
    """Read a header-first delimited file into raw records.

    The first row names the fields; every later row is zipped onto it.
    Blank rows are skipped.

    Args:
        file_path: Path to the export.
        delimiter: Field delimiter.

    Returns:
        One RawRecord per data row, in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ParseError: If the file is too large, has no header, or a row's
            width doesn't match the header.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    file_size = file_path.stat().st_size
    if file_size > MAX_CSV_FILE_SIZE:
        raise ParseError(
            f"File too large ({file_size / 1024 / 1024:.1f} MB). "
            f"Maximum allowed is {MAX_CSV_FILE_SIZE / 1024 / 1024:.0f} MB",
            file_path,
        )

    records: list[RawRecord] = []
    try:
        # utf-8-sig drops the BOM some exports start with
        with open(file_path, encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f, delimiter=delimiter)

            header = next(reader, None)
            if not header or all(cell.strip() == "" for cell in header):
                raise ParseError(f"No header row in {file_path.name}", file_path)
            header = [cell.strip() for cell in header]

            for row_num, row in enumerate(reader, start=2):
                if row_num - 1 > MAX_CSV_ROWS:
                    raise ParseError(
                        f"File exceeds maximum row limit ({MAX_CSV_ROWS:,} rows). "
                        f"Split file into smaller chunks.",
                        file_path,
                    )

                if not row or all(cell.strip() == "" for cell in row):
                    continue

                if len(row) != len(header):
                    raise ParseError(
                        f"Row {row_num}: expected {len(header)} fields, got {len(row)}",
                        file_path,
                    )

                records.append(dict(zip(header, row)))

    except ParseError:
        raise
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ParseError(f"Failed to read CSV file: {e}", file_path) from e

    logger.info(f"Read {len(records)} records from {file_path.name}")
    return records

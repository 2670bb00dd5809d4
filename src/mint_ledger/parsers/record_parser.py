"""Coerce raw Mint records into typed transactions."""

from collections.abc import Iterable, Mapping

from mint_ledger.models.transaction import (
    AMOUNT_FIELD,
    DATE_FIELD,
    Transaction,
)
from mint_ledger.parsers.base import MalformedRecord
from mint_ledger.utils.date_utils import parse_date
from mint_ledger.utils.decimal_utils import parse_amount
from mint_ledger.utils.logging_config import get_logger

logger = get_logger(__name__)


def parse_transaction(raw: Mapping[str, str]) -> Transaction:
    """Parse one raw record into a Transaction.

    ``Amount`` becomes a signed Decimal and ``Date`` a calendar date
    (MM/DD/YYYY). Every other field is kept as-is.

    Args:
        raw: Header-keyed string values for one row.

    Returns:
        The typed Transaction.

    Raises:
        MalformedRecord: If Amount or Date is missing or unparseable.
    """
    record = dict(raw)

    raw_amount = record.pop(AMOUNT_FIELD, None)
    if raw_amount is None:
        raise MalformedRecord("Missing 'Amount' field", field=AMOUNT_FIELD, record=dict(raw))
    try:
        amount = parse_amount(raw_amount)
    except ValueError as e:
        raise MalformedRecord(str(e), field=AMOUNT_FIELD, value=raw_amount, record=dict(raw)) from e

    raw_date = record.pop(DATE_FIELD, None)
    if raw_date is None:
        raise MalformedRecord("Missing 'Date' field", field=DATE_FIELD, record=dict(raw))
    try:
        txn_date = parse_date(raw_date)
    except ValueError as e:
        raise MalformedRecord(str(e), field=DATE_FIELD, value=raw_date, record=dict(raw)) from e

    return Transaction(date=txn_date, amount=amount, attributes=tuple(record.items()))


def parse_transactions(raws: Iterable[Mapping[str, str]]) -> list[Transaction]:
    """Parse every raw record, stopping at the first malformed one.

    Skipping bad rows is the caller's decision; see ``mint_ledger.cli``.

    Args:
        raws: Raw records in file order.

    Returns:
        Transactions in the same order.

    Raises:
        MalformedRecord: On the first record that fails to parse.
    """
    transactions = [parse_transaction(raw) for raw in raws]
    logger.debug(f"Parsed {len(transactions)} transactions")
    return transactions

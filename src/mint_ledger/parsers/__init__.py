"""Readers and field parsers for Mint transaction exports."""

from mint_ledger.parsers.base import MalformedRecord, ParseError
from mint_ledger.parsers.csv_parser import read_records
from mint_ledger.parsers.record_parser import parse_transaction, parse_transactions

__all__ = [
    "ParseError",
    "MalformedRecord",
    "read_records",
    "parse_transaction",
    "parse_transactions",
]

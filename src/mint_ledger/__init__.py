"""Classify a Mint transactions export into income and spending for one year."""

__version__ = "0.1.0"

from mint_ledger.models import (
    CreditCardDupeRule,
    DupePolarity,
    FieldPredicate,
    RawRecord,
    RuleSet,
    Transaction,
    UnknownField,
    YearSummary,
    build_predicate,
)
from mint_ledger.parsers import MalformedRecord, ParseError, parse_transaction, parse_transactions
from mint_ledger.processing import (
    Classification,
    Classifier,
    classify,
    generate_year_summary,
    group_by,
    net,
    sort_desc,
    sum_totals,
    top,
)

__all__ = [
    "__version__",
    "RawRecord",
    "Transaction",
    "UnknownField",
    "FieldPredicate",
    "CreditCardDupeRule",
    "DupePolarity",
    "RuleSet",
    "build_predicate",
    "YearSummary",
    "ParseError",
    "MalformedRecord",
    "parse_transaction",
    "parse_transactions",
    "Classification",
    "Classifier",
    "classify",
    "group_by",
    "sort_desc",
    "sum_totals",
    "top",
    "net",
    "generate_year_summary",
]

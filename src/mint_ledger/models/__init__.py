"""Data models for transactions, classification rules, and reports."""

from mint_ledger.models.report import YearSummary
from mint_ledger.models.rules import (
    CreditCardDupeRule,
    DupePolarity,
    FieldPredicate,
    RuleSet,
    build_predicate,
)
from mint_ledger.models.transaction import (
    RawRecord,
    Transaction,
    UnknownField,
)

__all__ = [
    "RawRecord",
    "Transaction",
    "UnknownField",
    "FieldPredicate",
    "CreditCardDupeRule",
    "DupePolarity",
    "RuleSet",
    "build_predicate",
    "YearSummary",
]

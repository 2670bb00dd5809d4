"""Classification and aggregation pipeline components."""

from mint_ledger.processing.aggregator import (
    group_by,
    net,
    sort_desc,
    sum_totals,
    top,
)
from mint_ledger.processing.classifier import (
    Classification,
    Classifier,
    classify,
)
from mint_ledger.processing.report_generator import generate_year_summary

__all__ = [
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

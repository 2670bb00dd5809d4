"""Report data generation for a target year."""

from collections.abc import Iterable

from mint_ledger.models.report import YearSummary
from mint_ledger.models.rules import RuleSet
from mint_ledger.models.transaction import DESCRIPTION_FIELD, Transaction
from mint_ledger.processing.aggregator import group_by
from mint_ledger.processing.classifier import Classifier


def generate_year_summary(
    transactions: Iterable[Transaction],
    target_year: int,
    rules: RuleSet | None = None,
    group_field: str = DESCRIPTION_FIELD,
) -> YearSummary:
    """Classify a year of transactions and group both sides.

    Single source of truth for the console report and both exporters.

    Args:
        transactions: Parsed transactions (any year).
        target_year: Calendar year to report on.
        rules: Rule set (default rules if None).
        group_field: Field to group totals by.

    Returns:
        YearSummary whose ``net`` equals ``net(income, spending)``.
    """
    classification = Classifier(rules).partition(transactions, target_year)

    return YearSummary(
        year=target_year,
        group_field=group_field,
        income_totals=group_by(classification.income, group_field),
        spending_totals=group_by(classification.spending, group_field),
        income_count=len(classification.income),
        spending_count=len(classification.spending),
        excluded_count=len(classification.excluded),
    )

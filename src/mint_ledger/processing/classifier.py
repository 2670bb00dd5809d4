"""Split a year of transactions into income and spending."""

from collections.abc import Iterable
from dataclasses import dataclass

from mint_ledger.models.rules import RuleSet
from mint_ledger.models.transaction import Transaction
from mint_ledger.utils.date_utils import is_in_year
from mint_ledger.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Classification:
    """Result of classifying one year of transactions.

    ``income`` and ``spending`` never overlap. A transaction can be in both
    ``income`` and ``excluded``; it is then reported as income and never
    as spending.

    Attributes:
        year: The target calendar year.
        transactions: Every distinct transaction dated in ``year``.
        income: Transactions matching the income rule.
        excluded: Ignorable transactions and credit card duplicates.
        spending: Everything in ``transactions`` not in income or excluded.
    """

    year: int
    transactions: frozenset[Transaction]
    income: frozenset[Transaction]
    excluded: frozenset[Transaction]
    spending: frozenset[Transaction]

    @property
    def dropped(self) -> frozenset[Transaction]:
        """Transactions counted in neither income nor spending."""
        return self.transactions - self.income - self.spending


class Classifier:
    """Classifies transactions with a configurable rule set.

    The classifier applies, for transactions dated in the target year:
    1. Income rule -> income
    2. Ignorable or credit card duplicate rule -> excluded
    3. Everything not income and not excluded -> spending

    Identical rows are indistinguishable and count once.
    """

    def __init__(self, rules: RuleSet | None = None):
        """Initialize classifier.

        Args:
            rules: Rule set to apply. Defaults to ``RuleSet.default()``.
        """
        self.rules = rules if rules is not None else RuleSet.default()

    def partition(self, transactions: Iterable[Transaction], target_year: int) -> Classification:
        """Classify transactions and keep all three sets.

        Args:
            transactions: Transactions of any year; not modified.
            target_year: Calendar year to report on.

        Returns:
            Classification for ``target_year``.
        """
        in_year = frozenset(t for t in transactions if is_in_year(t.date, target_year))
        income = frozenset(t for t in in_year if self.rules.is_income(t))
        excluded = frozenset(t for t in in_year if self.rules.is_excluded(t))
        spending = in_year - income - excluded

        logger.info(
            f"Classified {len(in_year)} transactions for {target_year}: "
            f"{len(income)} income, {len(spending)} spending, {len(excluded)} excluded"
        )
        overlap = income & excluded
        if overlap:
            logger.debug(f"{len(overlap)} transactions are both income and excluded; kept as income")

        return Classification(
            year=target_year,
            transactions=in_year,
            income=income,
            excluded=excluded,
            spending=spending,
        )

    def classify(
        self, transactions: Iterable[Transaction], target_year: int
    ) -> tuple[frozenset[Transaction], frozenset[Transaction]]:
        """Return ``(income, spending)`` for ``target_year``.

        Args:
            transactions: Transactions of any year; not modified.
            target_year: Calendar year to report on.

        Returns:
            Tuple of (income set, spending set).
        """
        result = self.partition(transactions, target_year)
        return result.income, result.spending


def classify(
    transactions: Iterable[Transaction],
    target_year: int,
    rules: RuleSet | None = None,
) -> tuple[frozenset[Transaction], frozenset[Transaction]]:
    """Convenience function to classify transactions.

    Args:
        transactions: Transactions to classify.
        target_year: Calendar year to report on.
        rules: Rule set (default rules if None).

    Returns:
        Tuple of (income set, spending set).
    """
    return Classifier(rules).classify(transactions, target_year)

"""Report data models for a single year's income and spending."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class YearSummary:
    """Grouped income and spending for one target year.

    Single source of truth for the console report and both exporters.

    Attributes:
        year: The target calendar year.
        group_field: Field the totals are grouped by (e.g. "Description").
        income_totals: Income amounts keyed by group.
        spending_totals: Spending amounts keyed by group.
        income_count: Number of distinct income transactions.
        spending_count: Number of distinct spending transactions.
        excluded_count: Number of ignorable or duplicate transactions.
    """

    year: int
    group_field: str
    income_totals: dict[str, Decimal] = field(default_factory=dict)
    spending_totals: dict[str, Decimal] = field(default_factory=dict)
    income_count: int = 0
    spending_count: int = 0
    excluded_count: int = 0

    @property
    def total_income(self) -> Decimal:
        """Sum of all income groups."""
        # processing imports models, so the aggregator is loaded on use
        from mint_ledger.processing.aggregator import sum_totals

        return sum_totals(self.income_totals)

    @property
    def total_spending(self) -> Decimal:
        """Sum of all spending groups."""
        from mint_ledger.processing.aggregator import sum_totals

        return sum_totals(self.spending_totals)

    @property
    def net(self) -> Decimal:
        """Total income minus total spending."""
        return self.total_income - self.total_spending

    def sorted_income(self) -> list[tuple[Hashable, Decimal]]:
        """Income groups, largest first."""
        from mint_ledger.processing.aggregator import sort_desc

        return sort_desc(self.income_totals)

    def sorted_spending(self) -> list[tuple[Hashable, Decimal]]:
        """Spending groups, largest first."""
        from mint_ledger.processing.aggregator import sort_desc

        return sort_desc(self.spending_totals)

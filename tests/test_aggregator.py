"""Tests for grouped aggregation."""

from datetime import date
from decimal import Decimal

import pytest

from mint_ledger.models.transaction import Transaction, UnknownField
from mint_ledger.processing.aggregator import group_by, net, sort_desc, sum_totals, top


def create_transaction(
    amount: str,
    description: str = "Test Transaction",
    category: str = "Shopping",
    trans_date: date = date(2012, 6, 1),
) -> Transaction:
    """Helper to create a Transaction for testing."""
    return Transaction.create(
        date=trans_date,
        amount=Decimal(amount),
        description=description,
        category=category,
        account_name="CHECKING",
    )


class TestGroupBy:
    """Tests for group_by."""

    def test_sums_same_description(self) -> None:
        """Test the Amazon example."""
        txns = [create_transaction("10.00", "Amazon"), create_transaction("20.00", "Amazon")]
        assert group_by(txns) == {"Amazon": Decimal("30.00")}

    def test_groups_by_other_field(self) -> None:
        """Test grouping by Category."""
        txns = [
            create_transaction("10.00", "Amazon", "Shopping"),
            create_transaction("5.00", "Target", "Shopping"),
            create_transaction("7.25", "Safeway", "Groceries"),
        ]

        assert group_by(txns, "Category") == {
            "Shopping": Decimal("15.00"),
            "Groceries": Decimal("7.25"),
        }

    def test_empty(self) -> None:
        """Test grouping nothing yields an empty mapping."""
        assert group_by([]) == {}

    def test_preserves_total(self) -> None:
        """Test the sum of groups equals the sum of amounts."""
        txns = [
            create_transaction("0.10", "A"),
            create_transaction("0.20", "B"),
            create_transaction("-0.30", "A"),
            create_transaction("1234.56", "C"),
        ]

        assert sum_totals(group_by(txns)) == sum((t.amount for t in txns), Decimal("0"))
        assert sum_totals(group_by(txns)) == Decimal("1234.56")

    def test_unknown_field_raises(self) -> None:
        """Test grouping by a missing field fails without a partial result."""
        with pytest.raises(UnknownField):
            group_by([create_transaction("1.00")], "Merchant")

    def test_unknown_field_on_some_transactions_raises(self) -> None:
        """Test one transaction missing the field is enough to fail."""
        tagged = Transaction(
            date=date(2012, 1, 1),
            amount=Decimal("1"),
            attributes={"Description": "x", "Labels": "work"},
        )
        with pytest.raises(UnknownField):
            group_by([tagged, create_transaction("1.00")], "Labels")


class TestSortAndTotals:
    """Tests for sort_desc, top, sum_totals and net."""

    def test_sort_desc(self) -> None:
        """Test totals come out non-increasing."""
        grouped = {"Amazon": Decimal("30.00"), "Cafe": Decimal("4.50"), "Rent": Decimal("1200.00")}

        result = sort_desc(grouped)

        assert [k for k, _ in result] == ["Rent", "Amazon", "Cafe"]
        totals = [v for _, v in result]
        assert totals == sorted(totals, reverse=True)

    def test_sort_desc_with_ties(self) -> None:
        """Test ties are all present regardless of order."""
        grouped = {"A": Decimal("1"), "B": Decimal("1"), "C": Decimal("2")}
        result = sort_desc(grouped)

        assert result[0] == ("C", Decimal("2"))
        assert set(result[1:]) == {("A", Decimal("1")), ("B", Decimal("1"))}

    def test_top(self) -> None:
        """Test top returns the largest groups only."""
        grouped = {"A": Decimal("1"), "B": Decimal("3"), "C": Decimal("2")}
        assert top(grouped, 2) == [("B", Decimal("3")), ("C", Decimal("2"))]

    def test_top_negative_limit(self) -> None:
        """Test a negative limit is rejected."""
        with pytest.raises(ValueError):
            top({}, -1)

    def test_sum_totals_empty(self) -> None:
        """Test the total of nothing is a Decimal zero."""
        result = sum_totals({})
        assert result == Decimal("0")
        assert isinstance(result, Decimal)

    def test_net(self) -> None:
        """Test income minus spending."""
        income = {create_transaction("2000.00", "ACME Corp")}
        spending = {create_transaction("300.00", "Rent"), create_transaction("45.50", "Cafe")}

        assert net(income, spending) == Decimal("1654.50")

    def test_net_of_nothing(self) -> None:
        """Test net with empty sets."""
        assert net(set(), set()) == Decimal("0")

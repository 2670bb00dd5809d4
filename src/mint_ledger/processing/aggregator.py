"""Grouped totals over sets of transactions."""

from collections import defaultdict
from collections.abc import Hashable, Iterable, Mapping
from decimal import Decimal

from mint_ledger.models.transaction import DESCRIPTION_FIELD, Transaction
from mint_ledger.utils.decimal_utils import sum_amounts
from mint_ledger.utils.logging_config import get_logger

logger = get_logger(__name__)


def group_by(
    transactions: Iterable[Transaction],
    field: str = DESCRIPTION_FIELD,
) -> dict[Hashable, Decimal]:
    """Sum amounts per distinct value of ``field``.

    Useful for e.g. grouping all Amazon purchases together.

    Args:
        transactions: Transactions to group.
        field: Column to group by (default "Description").

    Returns:
        Mapping of field value to summed amount, e.g. ``{"Amazon": Decimal("350.10")}``.

    Raises:
        UnknownField: If any transaction lacks ``field``.
    """
    grouped: dict[Hashable, list[Decimal]] = defaultdict(list)
    for txn in transactions:
        grouped[txn.get(field)].append(txn.amount)

    totals = {key: sum_amounts(amounts) for key, amounts in grouped.items()}
    logger.debug(f"Grouped transactions into {len(totals)} groups by {field!r}")
    return totals


def sort_desc(grouped: Mapping[Hashable, Decimal]) -> list[tuple[Hashable, Decimal]]:
    """Return ``(key, total)`` pairs, largest total first.

    Order among equal totals is not defined.
    """
    return sorted(grouped.items(), key=lambda kv: kv[1], reverse=True)


def top(grouped: Mapping[Hashable, Decimal], limit: int) -> list[tuple[Hashable, Decimal]]:
    """The ``limit`` largest groups."""
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    return sort_desc(grouped)[:limit]


def sum_totals(grouped: Mapping[Hashable, Decimal]) -> Decimal:
    """Sum of all group totals.

    Equals the sum of ``Amount`` over the transactions that were grouped.
    """
    return sum_amounts(grouped.values())


def net(income: Iterable[Transaction], spending: Iterable[Transaction]) -> Decimal:
    """Income minus spending.

    Args:
        income: Income transactions.
        spending: Spending transactions.

    Returns:
        ``sum_totals(group_by(income)) - sum_totals(group_by(spending))``.
    """
    return sum_totals(group_by(income)) - sum_totals(group_by(spending))

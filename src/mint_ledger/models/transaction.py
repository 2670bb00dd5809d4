"""Transaction data models for Mint export rows."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

# A CSV row keyed by header name, before any type coercion
RawRecord = dict[str, str]

# Mint column names
AMOUNT_FIELD = "Amount"
DATE_FIELD = "Date"
DESCRIPTION_FIELD = "Description"
CATEGORY_FIELD = "Category"
ACCOUNT_NAME_FIELD = "Account Name"


class UnknownField(KeyError):
    """Raised when a transaction has no field with the requested name."""

    def __init__(self, field_name: str):
        """Initialize UnknownField.

        Args:
            field_name: The field name that was looked up.
        """
        self.field = field_name
        super().__init__(field_name)

    def __str__(self) -> str:
        return f"Unknown transaction field: '{self.field}'"


@dataclass(frozen=True)
class Transaction:
    """A typed Mint transaction.

    ``Amount`` and ``Date`` are coerced; every other column is kept as the
    string it was in the export and stored in ``attributes`` as sorted
    (name, value) pairs. Equality and hashing cover every field, so two
    rows with identical values are the same set member.

    Attributes:
        date: Calendar date of the transaction.
        amount: Signed amount.
        attributes: All remaining string columns, keyed by header name.
    """

    date: date
    amount: Decimal
    attributes: tuple[tuple[str, str], ...] = ()

    _index: dict[str, str] = field(
        default_factory=dict, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        attrs = self.attributes
        if isinstance(attrs, Mapping):
            attrs = attrs.items()
        pairs = tuple(sorted((str(k), str(v)) for k, v in attrs))

        for name, _value in pairs:
            if name in (AMOUNT_FIELD, DATE_FIELD):
                raise ValueError(f"'{name}' is a typed field and cannot be an attribute")

        object.__setattr__(self, "attributes", pairs)
        object.__setattr__(self, "_index", dict(pairs))

    @classmethod
    def create(
        cls,
        date: date,
        amount: Decimal,
        description: str = "",
        category: str = "",
        account_name: str = "",
        extra: Mapping[str, str] | None = None,
    ) -> "Transaction":
        """Build a transaction from the standard Mint columns.

        Args:
            date: Transaction date.
            amount: Signed amount.
            description: Merchant/payee description.
            category: Mint category.
            account_name: Account the transaction was posted to.
            extra: Any additional string columns.

        Returns:
            A new Transaction.
        """
        attributes: dict[str, str] = dict(extra or {})
        attributes[DESCRIPTION_FIELD] = description
        attributes[CATEGORY_FIELD] = category
        attributes[ACCOUNT_NAME_FIELD] = account_name
        return cls(date=date, amount=amount, attributes=tuple(attributes.items()))

    @property
    def field_names(self) -> tuple[str, ...]:
        """Names of every field on this transaction, typed fields first."""
        return (DATE_FIELD, AMOUNT_FIELD) + tuple(self._index)

    def has_field(self, name: str) -> bool:
        return name in (DATE_FIELD, AMOUNT_FIELD) or name in self._index

    def get(self, name: str) -> object:
        """Look up a field by its header name.

        Args:
            name: Column name, e.g. "Category" or "Amount".

        Returns:
            The Decimal amount, the date, or the string value.

        Raises:
            UnknownField: If the transaction has no such field.
        """
        if name == AMOUNT_FIELD:
            return self.amount
        if name == DATE_FIELD:
            return self.date
        try:
            return self._index[name]
        except KeyError:
            raise UnknownField(name) from None

    @property
    def description(self) -> str:
        return self._index.get(DESCRIPTION_FIELD, "")

    @property
    def category(self) -> str:
        return self._index.get(CATEGORY_FIELD, "")

    @property
    def account_name(self) -> str:
        return self._index.get(ACCOUNT_NAME_FIELD, "")

    def to_record(self) -> dict[str, object]:
        """Return all fields as a plain dict keyed by header name."""
        record: dict[str, object] = dict(self._index)
        record[DATE_FIELD] = self.date
        record[AMOUNT_FIELD] = self.amount
        return record

    def __repr__(self) -> str:
        return (
            f"Transaction(date={self.date}, "
            f"description={self.description[:30]!r}, "
            f"amount={self.amount}, "
            f"account={self.account_name!r})"
        )

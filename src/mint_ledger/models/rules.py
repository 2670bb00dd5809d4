"""Field-matching predicates and the rule set used to classify transactions."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from mint_ledger.models.transaction import (
    ACCOUNT_NAME_FIELD,
    CATEGORY_FIELD,
    DESCRIPTION_FIELD,
    Transaction,
)
from mint_ledger.utils.logging_config import get_logger

logger = get_logger(__name__)

# Maximum pattern length to prevent overly complex patterns
MAX_PATTERN_LENGTH = 500

# Regex to detect nested quantifiers (catches (a+)+, ([a-z]+)*, (a+){2,} ...)
_NESTED_QUANTIFIER_PATTERN = re.compile(
    r"\([^)]*[+*?][^)]*\)[+*?]|"
    r"\([^)]*[+*?][^)]*\)\{[0-9,]+\}"
)

DEFAULT_INCOME_PATTERNS = ("Income", "Transfer", "Paycheck")

DEFAULT_IGNORABLE_PATTERNS = (
    "Vanguard",
    "Check 7.*",
    "Transfer to CREDIT CARD",
    "Vgi Prime Mm",
    "Vgilifest Gro",
)

DEFAULT_CREDIT_CARD_ACCOUNT_PATTERNS = ("CREDIT CARD",)
DEFAULT_CREDIT_CARD_PAYMENT_CATEGORY = "Credit Card Payment"


def _is_safe_pattern(pattern: str) -> tuple[bool, str]:
    """Check if a regex pattern is safe from catastrophic backtracking.

    Args:
        pattern: Regex pattern string to validate.

    Returns:
        Tuple of (is_safe, reason if unsafe).
    """
    if len(pattern) > MAX_PATTERN_LENGTH:
        return False, f"Pattern exceeds {MAX_PATTERN_LENGTH} character limit"

    if _NESTED_QUANTIFIER_PATTERN.search(pattern):
        return False, "Pattern contains dangerous nested quantifier"

    return True, ""


@dataclass(frozen=True)
class FieldPredicate:
    """Matches one transaction field against a list of regular expressions.

    Patterns are searched anywhere in the field value and are case
    sensitive, so ``Transfer`` matches the category "Transfer" and
    "Credit Card Transfer" but not "transfer". A transaction without the
    field never matches.

    Attributes:
        field: Column name to inspect, e.g. "Category".
        patterns: Regular expressions; any one matching is enough.
    """

    field: str
    patterns: tuple[str, ...]

    _compiled: tuple[re.Pattern[str], ...] = field(
        default=(), init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        patterns = self.patterns
        if isinstance(patterns, str):
            patterns = (patterns,)
        patterns = tuple(patterns)
        compiled = []
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise TypeError(f"Pattern for '{self.field}' must be a string, got {pattern!r}")
            is_safe, reason = _is_safe_pattern(pattern)
            if not is_safe:
                raise ValueError(f"Unsafe pattern '{pattern}' for '{self.field}': {reason}")
            try:
                compiled.append(re.compile(pattern))
            except re.error as e:
                raise ValueError(f"Invalid pattern '{pattern}' for '{self.field}': {e}") from e

        object.__setattr__(self, "patterns", patterns)
        object.__setattr__(self, "_compiled", tuple(compiled))

    def evaluate(self, transaction: Transaction) -> bool:
        """Return True if the field is present and any pattern matches it."""
        if not transaction.has_field(self.field):
            return False

        value = str(transaction.get(self.field))
        for pattern in self._compiled:
            if pattern.search(value):
                logger.debug(f"{self.field} {value!r} matched {pattern.pattern!r}")
                return True
        return False

    def __call__(self, transaction: Transaction) -> bool:
        return self.evaluate(transaction)

    @classmethod
    def from_dict(cls, data: dict[str, object], default_field: str) -> "FieldPredicate":
        """Create a predicate from a config mapping ``{field, patterns}``.

        Args:
            data: Mapping with an optional "field" and a "patterns" list.
            default_field: Field to use when "field" is omitted.

        Returns:
            A new FieldPredicate.

        Raises:
            ValueError: If patterns are missing, not a list, or invalid.
        """
        patterns = data.get("patterns")
        if not isinstance(patterns, list):
            raise ValueError(f"'patterns' must be a list, got {type(patterns).__name__}")
        return cls(
            field=str(data.get("field", default_field)),
            patterns=tuple(str(p) for p in patterns),
        )


def build_predicate(field: str, patterns: Iterable[str]) -> FieldPredicate:
    """Build a predicate matching ``field`` against ``patterns``.

    Args:
        field: Column name to inspect.
        patterns: Regular expressions, evaluated in order.

    Returns:
        A reusable FieldPredicate.
    """
    if isinstance(patterns, str):
        patterns = (patterns,)
    return FieldPredicate(field=field, patterns=tuple(patterns))


class DupePolarity(Enum):
    """Which side of a credit card payment/line item pair counts as the duplicate."""

    LINE_ITEMS = "line_items"  # Card purchases; the lump payment is kept
    PAYMENTS = "payments"  # The lump payment; card purchases are kept


@dataclass(frozen=True)
class CreditCardDupeRule:
    """Detects credit card transactions that double-count spending.

    A lump "Credit Card Payment" in the card account bundles the card's
    individual purchases, which are also in the export. Only one side of
    that pair may be counted.

    Attributes:
        account: Predicate identifying the credit card account.
        category_field: Column holding the category.
        payment_category: Exact category of the lump payment.
        exclude: Which side of the pair is the duplicate.
    """

    account: FieldPredicate = field(
        default_factory=lambda: FieldPredicate(
            ACCOUNT_NAME_FIELD, DEFAULT_CREDIT_CARD_ACCOUNT_PATTERNS
        )
    )
    category_field: str = CATEGORY_FIELD
    payment_category: str = DEFAULT_CREDIT_CARD_PAYMENT_CATEGORY
    exclude: DupePolarity = DupePolarity.LINE_ITEMS

    def evaluate(self, transaction: Transaction) -> bool:
        if not self.account.evaluate(transaction):
            return False

        is_payment = (
            transaction.has_field(self.category_field)
            and transaction.get(self.category_field) == self.payment_category
        )
        if self.exclude is DupePolarity.PAYMENTS:
            return is_payment
        return not is_payment

    def __call__(self, transaction: Transaction) -> bool:
        return self.evaluate(transaction)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "CreditCardDupeRule":
        """Create from a config mapping.

        Raises:
            ValueError: If the polarity or account patterns are invalid.
        """
        mode = str(data.get("exclude", DupePolarity.LINE_ITEMS.value)).lower()
        try:
            polarity = DupePolarity(mode)
        except ValueError:
            valid = ", ".join(p.value for p in DupePolarity)
            raise ValueError(f"Unknown credit card dupe mode '{mode}' (expected one of: {valid})") from None

        account_patterns = data.get("account_patterns", list(DEFAULT_CREDIT_CARD_ACCOUNT_PATTERNS))
        return cls(
            account=FieldPredicate.from_dict(
                {
                    "field": data.get("account_field", ACCOUNT_NAME_FIELD),
                    "patterns": account_patterns,
                },
                default_field=ACCOUNT_NAME_FIELD,
            ),
            category_field=str(data.get("category_field", CATEGORY_FIELD)),
            payment_category=str(data.get("payment_category", DEFAULT_CREDIT_CARD_PAYMENT_CATEGORY)),
            exclude=polarity,
        )


def _default_income() -> FieldPredicate:
    return FieldPredicate(CATEGORY_FIELD, DEFAULT_INCOME_PATTERNS)


def _default_ignorable() -> FieldPredicate:
    return FieldPredicate(DESCRIPTION_FIELD, DEFAULT_IGNORABLE_PATTERNS)


@dataclass(frozen=True)
class RuleSet:
    """The three rules the classifier applies.

    Rules left out of the constructor keep their stock Mint defaults.

    Attributes:
        income: Marks money received.
        ignorable: Marks transfers and investment moves that are neither
            earning nor spending.
        credit_card_dupe: Marks credit card rows already counted elsewhere.
    """

    income: FieldPredicate = field(default_factory=_default_income)
    ignorable: FieldPredicate = field(default_factory=_default_ignorable)
    credit_card_dupe: CreditCardDupeRule = field(default_factory=CreditCardDupeRule)

    @classmethod
    def default(cls) -> "RuleSet":
        """Rule set for a Mint export with the stock category names."""
        return cls()

    def is_income(self, transaction: Transaction) -> bool:
        return self.income.evaluate(transaction)

    def is_ignorable(self, transaction: Transaction) -> bool:
        return self.ignorable.evaluate(transaction)

    def is_credit_card_dupe(self, transaction: Transaction) -> bool:
        return self.credit_card_dupe.evaluate(transaction)

    def is_excluded(self, transaction: Transaction) -> bool:
        """Ignorable or a credit card duplicate."""
        return self.is_ignorable(transaction) or self.is_credit_card_dupe(transaction)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "RuleSet":
        """Create from the ``rules`` section of settings.yaml.

        Sections that are absent keep their defaults.

        Raises:
            ValueError: If a section is malformed.
        """
        defaults = cls.default()

        income = defaults.income
        if data.get("income") is not None:
            income = FieldPredicate.from_dict(_section(data, "income"), CATEGORY_FIELD)

        ignorable = defaults.ignorable
        if data.get("ignorable") is not None:
            ignorable = FieldPredicate.from_dict(_section(data, "ignorable"), DESCRIPTION_FIELD)

        credit_card_dupe = defaults.credit_card_dupe
        if data.get("credit_card_dupe") is not None:
            credit_card_dupe = CreditCardDupeRule.from_dict(_section(data, "credit_card_dupe"))

        return cls(income=income, ignorable=ignorable, credit_card_dupe=credit_card_dupe)


def _section(data: dict[str, object], key: str) -> dict[str, object]:
    section = data[key]
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(section).__name__}")
    return section

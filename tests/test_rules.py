"""Tests for field predicates and the default rule set."""

from datetime import date
from decimal import Decimal

import pytest

from mint_ledger.models.rules import (
    CreditCardDupeRule,
    DupePolarity,
    FieldPredicate,
    RuleSet,
    build_predicate,
)
from mint_ledger.models.transaction import Transaction


def create_transaction(
    description: str = "Test Transaction",
    category: str = "Shopping",
    account_name: str = "CHECKING",
    amount: Decimal = Decimal("10.00"),
    trans_date: date = date(2012, 6, 1),
) -> Transaction:
    """Helper to create a Transaction for testing."""
    return Transaction.create(
        date=trans_date,
        amount=amount,
        description=description,
        category=category,
        account_name=account_name,
    )


class TestFieldPredicate:
    """Tests for FieldPredicate / build_predicate."""

    def test_matches_any_pattern(self) -> None:
        """Test logical OR over patterns."""
        predicate = build_predicate("Category", ["Income", "Paycheck"])

        assert predicate.evaluate(create_transaction(category="Paycheck"))
        assert predicate.evaluate(create_transaction(category="Income"))
        assert not predicate.evaluate(create_transaction(category="Groceries"))

    def test_substring_match(self) -> None:
        """Test patterns match anywhere in the value."""
        predicate = build_predicate("Category", ["Transfer"])
        assert predicate.evaluate(create_transaction(category="Credit Card Transfer"))

    def test_regex_match(self) -> None:
        """Test patterns are regular expressions."""
        predicate = build_predicate("Description", ["Check 7.*"])

        assert predicate.evaluate(create_transaction(description="Check 7041"))
        assert not predicate.evaluate(create_transaction(description="Check 6041"))

    def test_case_sensitive(self) -> None:
        """Test matching is case sensitive."""
        predicate = build_predicate("Category", ["Income"])
        assert not predicate.evaluate(create_transaction(category="income"))

    def test_order_does_not_change_result(self) -> None:
        """Test pattern order only affects early exit."""
        forward = build_predicate("Category", ["Income", "Transfer", "Paycheck"])
        backward = build_predicate("Category", ["Paycheck", "Transfer", "Income"])

        for category in ["Income", "Transfer", "Paycheck", "Gas", ""]:
            txn = create_transaction(category=category)
            assert forward.evaluate(txn) == backward.evaluate(txn)

    def test_missing_field_never_matches(self) -> None:
        """Test a transaction without the field evaluates False."""
        predicate = build_predicate("Labels", [".*"])
        assert not predicate.evaluate(create_transaction())

    def test_no_patterns_never_matches(self) -> None:
        """Test an empty pattern list matches nothing."""
        predicate = build_predicate("Category", [])
        assert not predicate.evaluate(create_transaction())

    def test_callable(self) -> None:
        """Test predicates can be used directly as filter functions."""
        predicate = build_predicate("Category", ["Income"])
        txns = [create_transaction(category="Income"), create_transaction(category="Gas")]

        assert list(filter(predicate, txns)) == txns[:1]

    def test_single_string_pattern(self) -> None:
        """Test a bare string is treated as one pattern."""
        predicate = build_predicate("Category", "Income")
        assert predicate.patterns == ("Income",)

    def test_invalid_regex_raises(self) -> None:
        """Test invalid patterns fail at construction."""
        with pytest.raises(ValueError, match="Invalid pattern"):
            build_predicate("Description", ["("])

    def test_unsafe_regex_raises(self) -> None:
        """Test nested quantifiers are rejected."""
        with pytest.raises(ValueError, match="Unsafe pattern"):
            build_predicate("Description", [r"(a+)+$"])

    def test_value_equality(self) -> None:
        """Test predicates compare by field and patterns."""
        assert build_predicate("Category", ["A"]) == FieldPredicate("Category", ("A",))

    def test_from_dict(self) -> None:
        """Test config construction with a default field."""
        predicate = FieldPredicate.from_dict({"patterns": ["Salary"]}, default_field="Category")

        assert predicate.field == "Category"
        assert predicate.patterns == ("Salary",)

    def test_from_dict_requires_list(self) -> None:
        """Test patterns must be a list."""
        with pytest.raises(ValueError, match="must be a list"):
            FieldPredicate.from_dict({"patterns": "Salary"}, default_field="Category")


class TestDefaultRules:
    """Tests for RuleSet.default()."""

    @pytest.mark.parametrize("category", ["Income", "Transfer", "Paycheck", "Other Income"])
    def test_income_categories(self, category: str) -> None:
        """Test default income categories."""
        assert RuleSet.default().is_income(create_transaction(category=category))

    @pytest.mark.parametrize(
        "description",
        [
            "Vanguard",
            "Vanguard Brokerage",
            "Check 7123",
            "Transfer to CREDIT CARD",
            "Vgi Prime Mm",
            "Vgilifest Gro",
        ],
    )
    def test_ignorable_descriptions(self, description: str) -> None:
        """Test default ignorable descriptions."""
        assert RuleSet.default().is_ignorable(create_transaction(description=description))

    def test_ordinary_purchase_not_excluded(self) -> None:
        """Test a normal checking purchase matches nothing."""
        rules = RuleSet.default()
        txn = create_transaction(description="Whole Foods", category="Groceries")

        assert not rules.is_income(txn)
        assert not rules.is_excluded(txn)


class TestCreditCardDupeRule:
    """Tests for CreditCardDupeRule polarity."""

    def test_line_item_is_dupe_by_default(self) -> None:
        """Test card purchases are duplicates of the lump payment."""
        rule = CreditCardDupeRule()
        assert rule.evaluate(create_transaction(category="Pharmacy", account_name="CREDIT CARD"))

    def test_payment_is_kept_by_default(self) -> None:
        """Test the lump payment itself is not a duplicate."""
        rule = CreditCardDupeRule()
        txn = create_transaction(category="Credit Card Payment", account_name="CREDIT CARD")
        assert not rule.evaluate(txn)

    def test_payment_category_is_exact(self) -> None:
        """Test a category merely containing the payment name is a line item."""
        rule = CreditCardDupeRule()
        txn = create_transaction(category="Credit Card Payment Fee", account_name="CREDIT CARD")
        assert rule.evaluate(txn)

    def test_other_accounts_never_dupes(self) -> None:
        """Test transactions outside the card account are never duplicates."""
        for exclude in DupePolarity:
            rule = CreditCardDupeRule(exclude=exclude)
            assert not rule.evaluate(create_transaction(category="Credit Card Payment"))
            assert not rule.evaluate(create_transaction(category="Pharmacy"))

    def test_account_matched_as_pattern(self) -> None:
        """Test the account name is matched as a regex, not exactly."""
        rule = CreditCardDupeRule()
        assert rule.evaluate(create_transaction(category="Gas", account_name="CREDIT CARD 1234"))

    def test_payments_polarity(self) -> None:
        """Test the alternative polarity flips which side is dropped."""
        rule = CreditCardDupeRule(exclude=DupePolarity.PAYMENTS)

        assert rule.evaluate(create_transaction(category="Credit Card Payment", account_name="CREDIT CARD"))
        assert not rule.evaluate(create_transaction(category="Pharmacy", account_name="CREDIT CARD"))

    def test_from_dict(self) -> None:
        """Test config construction."""
        rule = CreditCardDupeRule.from_dict(
            {"account_patterns": ["VISA"], "payment_category": "Payment", "exclude": "payments"}
        )

        assert rule.exclude is DupePolarity.PAYMENTS
        assert rule.evaluate(create_transaction(category="Payment", account_name="VISA"))

    def test_from_dict_rejects_unknown_mode(self) -> None:
        """Test an unknown polarity is an error."""
        with pytest.raises(ValueError, match="Unknown credit card dupe mode"):
            CreditCardDupeRule.from_dict({"exclude": "both"})


class TestRuleSetFromDict:
    """Tests for RuleSet.from_dict."""

    def test_empty_keeps_defaults(self) -> None:
        """Test absent sections fall back to defaults."""
        assert RuleSet.from_dict({}) == RuleSet.default()

    def test_overrides_income(self) -> None:
        """Test a configured income rule replaces the default."""
        rules = RuleSet.from_dict({"income": {"field": "Category", "patterns": ["Salary"]}})

        assert rules.is_income(create_transaction(category="Salary"))
        assert not rules.is_income(create_transaction(category="Paycheck"))
        assert rules.ignorable == RuleSet.default().ignorable

    def test_section_must_be_mapping(self) -> None:
        """Test a non-mapping section is rejected."""
        with pytest.raises(ValueError, match="must be a mapping"):
            RuleSet.from_dict({"ignorable": ["Vanguard"]})

    def test_partial_construction_keeps_defaults(self) -> None:
        """Test rules not passed to the constructor fall back to defaults."""
        rules = RuleSet(income=build_predicate("Category", ["Salary"]))

        assert rules.ignorable == RuleSet.default().ignorable
        assert rules.credit_card_dupe == RuleSet.default().credit_card_dupe
        assert rules.is_ignorable(create_transaction(description="Vanguard"))

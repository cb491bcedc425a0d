"""Tests for domain entities."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from pocketledger.domain.entities import (
    Division,
    IncomeExpense,
    Period,
    Transaction,
    TransactionKind,
)
from pocketledger.domain.errors import DomainError, ValidationError


class TestTransaction:
    """Tests for Transaction entity."""

    def test_transaction_immutability(self):
        """Test that Transaction entities are immutable."""
        txn = Transaction(
            id="t1",
            owner_id="ada@example.com",
            kind=TransactionKind.INCOME,
            amount=Decimal("10"),
            category="Gift",
            division=Division.PERSONAL,
            account="Cash",
            description=None,
            occurred_at=datetime.now(UTC),
            created_at=datetime.now(UTC),
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            txn.amount = Decimal("20")
        assert not txn.is_transfer


class TestEnums:
    """Tests for parsing enum values."""

    def test_period_parse(self):
        assert Period.parse("weekly") == Period.WEEKLY
        assert Period.parse(Period.YEARLY) == Period.YEARLY

    def test_period_parse_unknown(self):
        with pytest.raises(ValidationError) as excinfo:
            Period.parse("biweekly")
        assert "daily, weekly, monthly, yearly" in str(excinfo.value)

    def test_kind_parse_unknown(self):
        with pytest.raises(ValidationError):
            TransactionKind.parse("refund")

    def test_division_parse(self):
        assert Division.parse(" personal ") == Division.PERSONAL
        assert Division.parse(Division.OFFICE) == Division.OFFICE

    def test_domain_errors_are_value_errors(self):
        """Existing ValueError handling keeps working."""
        assert issubclass(DomainError, ValueError)
        with pytest.raises(ValueError):
            Period.parse("hourly")


class TestIncomeExpense:
    """Tests for the IncomeExpense value type."""

    def test_add_returns_new_value(self):
        empty = IncomeExpense()
        income = empty.add(TransactionKind.INCOME, Decimal("5"))
        both = income.add(TransactionKind.EXPENSE, Decimal("2"))

        assert empty == IncomeExpense(Decimal("0"), Decimal("0"))
        assert income == IncomeExpense(income=Decimal("5"))
        assert both == IncomeExpense(income=Decimal("5"), expense=Decimal("2"))
        assert both.to_payload() == {"income": 5.0, "expense": 2.0}

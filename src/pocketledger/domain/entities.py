"""Domain model entities for pocketledger.

These are pure data classes representing business concepts, independent of
the storage schema. Storage backends convert to and from these types so the
ledger logic never depends on how records are persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pocketledger.domain.errors import ValidationError, unknown_period


class TransactionKind(str, Enum):
    """Kind of a transaction record."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"

    @classmethod
    def parse(cls, value: "str | TransactionKind") -> "TransactionKind":
        """Parse a kind name, raising ValidationError if unknown."""
        try:
            return cls(value)
        except ValueError:
            supported = ", ".join(kind.value for kind in cls)
            raise ValidationError(
                f"Unknown transaction type: '{value}'. Supported types: {supported}"
            ) from None


class Division(str, Enum):
    """Bookkeeping division a transaction belongs to."""

    PERSONAL = "Personal"
    OFFICE = "Office"

    @classmethod
    def parse(cls, value: "str | Division") -> "Division":
        """Parse a division name (case-insensitive)."""
        if isinstance(value, Division):
            return value
        for division in cls:
            if division.value.lower() == str(value).strip().lower():
                return division
        supported = ", ".join(division.value for division in cls)
        raise ValidationError(
            f"Unknown division: '{value}'. Supported divisions: {supported}"
        )


class Period(str, Enum):
    """Analytics period granularity."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: "str | Period") -> "Period":
        """Parse a period name, raising ValidationError if unknown."""
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                unknown_period(str(value), [period.value for period in cls])
            ) from None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    Transfers are stored as two records sharing ``transfer_group_id``: one
    with ``account == from_account`` and one with ``account == to_account``.
    """

    id: str
    owner_id: str
    kind: TransactionKind
    amount: Decimal
    category: str
    division: Division
    account: str
    description: Optional[str]
    occurred_at: datetime
    created_at: datetime
    from_account: Optional[str] = None
    to_account: Optional[str] = None
    transfer_group_id: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def is_transfer(self) -> bool:
        return self.kind == TransactionKind.TRANSFER


@dataclass(frozen=True)
class User:
    """Registered user. The email doubles as the owner id."""

    email: str
    name: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class Session:
    """Opaque session token issued on login."""

    token: str
    owner_id: str
    created_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IncomeExpense:
    """Income and expense totals for one bucket or category."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    def add(self, kind: TransactionKind, amount: Decimal) -> "IncomeExpense":
        """Return a new value with ``amount`` added to the side for ``kind``."""
        if kind == TransactionKind.INCOME:
            return IncomeExpense(income=self.income + amount, expense=self.expense)
        return IncomeExpense(income=self.income, expense=self.expense + amount)

    def to_payload(self) -> dict[str, float]:
        return {"income": float(self.income), "expense": float(self.expense)}


@dataclass(frozen=True)
class PeriodBuckets:
    """Result of folding transactions into period buckets."""

    series: dict[str, IncomeExpense]
    categories: dict[str, IncomeExpense]
    total_income: Decimal
    total_expense: Decimal


@dataclass(frozen=True)
class AccountBalance:
    """Derived balance of a named account."""

    name: str
    balance: Decimal


@dataclass(frozen=True)
class AccountsReport:
    """Account balances for one owner."""

    accounts: tuple[AccountBalance, ...]
    total_balance: Decimal

    def to_payload(self) -> dict[str, Any]:
        return {
            "accounts": [
                {"name": account.name, "balance": float(account.balance)}
                for account in self.accounts
            ],
            "totalBalance": float(self.total_balance),
        }


@dataclass(frozen=True)
class AnalyticsReport:
    """Period-bucketed income/expense analytics for one owner."""

    period: Period
    now: datetime
    series: dict[str, IncomeExpense] = field(default_factory=dict)
    categories: dict[str, IncomeExpense] = field(default_factory=dict)
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")

    def to_payload(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "data": {key: value.to_payload() for key, value in self.series.items()},
            "categories": {
                name: value.to_payload() for name, value in self.categories.items()
            },
            "summary": {
                "totalIncome": float(self.total_income),
                "totalExpense": float(self.total_expense),
            },
        }

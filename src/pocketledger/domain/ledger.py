"""Ledger aggregation.

Pure functions that fold a snapshot of one owner's transactions into account
balances and period-bucketed analytics. Nothing here touches storage; callers
pass in a collection and get back new values. The input is never mutated.
"""

from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from typing import Callable, Iterable, Union

from dateutil.relativedelta import relativedelta

from pocketledger.domain.entities import (
    IncomeExpense,
    Period,
    PeriodBuckets,
    Transaction,
    TransactionKind,
)

DEFAULT_ACCOUNTS = ("Cash", "Bank", "Savings", "Credit Card")
FALLBACK_ACCOUNT = "Cash"

# How far back from "now" each period looks.
LOOKBACKS: dict[Period, Union[timedelta, relativedelta]] = {
    Period.DAILY: timedelta(days=7),
    Period.WEEKLY: timedelta(days=30),
    Period.MONTHLY: relativedelta(months=12),
    Period.YEARLY: relativedelta(years=5),
}


def as_utc(value: date | datetime) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime.

    Naive datetimes are taken to be UTC already; a bare date means midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return datetime(value.year, value.month, value.day, tzinfo=UTC)


def week_start(moment: datetime) -> datetime:
    """Return the Sunday that starts the week containing ``moment``."""
    # weekday(): Monday == 0 ... Sunday == 6
    return moment - timedelta(days=(moment.weekday() + 1) % 7)


BUCKET_KEYS: dict[Period, Callable[[datetime], str]] = {
    Period.DAILY: lambda moment: moment.strftime("%Y-%m-%d"),
    Period.WEEKLY: lambda moment: week_start(moment).strftime("%Y-%m-%d"),
    Period.MONTHLY: lambda moment: moment.strftime("%Y-%m"),
    Period.YEARLY: lambda moment: f"{moment.year:04d}",
}


def balance_effect(txn: Transaction) -> Decimal:
    """Signed effect of a single record on its own account."""
    if txn.kind == TransactionKind.INCOME:
        return txn.amount
    if txn.kind == TransactionKind.EXPENSE:
        return -txn.amount
    if txn.account == txn.from_account:
        return -txn.amount
    if txn.account == txn.to_account:
        return txn.amount
    # Transfer leg that matches neither side
    return Decimal("0")


def compute_account_balances(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Fold transactions into a mapping of account name to balance.

    Default accounts come first (always present, at zero if unused), followed
    by other accounts in order of first appearance.

    Args:
        transactions: Transactions of a single owner, in any order

    Returns:
        Dict of account name to balance
    """
    balances: dict[str, Decimal] = {name: Decimal("0") for name in DEFAULT_ACCOUNTS}

    for txn in transactions:
        account = txn.account or FALLBACK_ACCOUNT
        balances[account] = balances.get(account, Decimal("0")) + balance_effect(txn)

    return balances


def total_balance(balances: dict[str, Decimal]) -> Decimal:
    """Sum of all account balances."""
    return sum(balances.values(), Decimal("0"))


def lookback_start(period: Period, now: datetime) -> datetime:
    """Earliest ``occurred_at`` included for ``period`` as of ``now``."""
    return now - LOOKBACKS[period]


def bucket_key(period: Period, moment: datetime) -> str:
    """Bucket key for ``moment`` under ``period``."""
    return BUCKET_KEYS[period](moment)


def bucket_by_period(
    transactions: Iterable[Transaction],
    period: Union[Period, str],
    now: datetime,
) -> PeriodBuckets:
    """Group income and expense transactions into period buckets.

    Only records with ``occurred_at >= now - lookback`` are included, and
    transfers never are. The series is sorted by bucket key; every key
    format is zero-padded so string order matches chronological order.

    Args:
        transactions: Transactions of a single owner, in any order
        period: Period granularity (Period or its string value)
        now: Reference time the lookback window is measured from

    Returns:
        PeriodBuckets with series, category summary and totals

    Raises:
        ValidationError: If period is not recognized
    """
    period = Period.parse(period)
    now = as_utc(now)
    start = lookback_start(period, now)

    series: dict[str, IncomeExpense] = {}
    categories: dict[str, IncomeExpense] = {}
    total_income = Decimal("0")
    total_expense = Decimal("0")

    for txn in transactions:
        if txn.kind == TransactionKind.TRANSFER or txn.occurred_at < start:
            continue

        key = bucket_key(period, txn.occurred_at)
        series[key] = series.get(key, IncomeExpense()).add(txn.kind, txn.amount)
        categories[txn.category] = categories.get(txn.category, IncomeExpense()).add(
            txn.kind, txn.amount
        )

        if txn.kind == TransactionKind.INCOME:
            total_income += txn.amount
        else:
            total_expense += txn.amount

    return PeriodBuckets(
        series={key: series[key] for key in sorted(series)},
        categories=categories,
        total_income=total_income,
        total_expense=total_expense,
    )

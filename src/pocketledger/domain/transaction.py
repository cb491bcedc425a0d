"""Transaction domain service."""

import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import structlog

from pocketledger.domain.entities import Division, Transaction, TransactionKind
from pocketledger.domain.errors import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    edit_window_expired,
    missing_field,
    transaction_not_found,
)
from pocketledger.domain.ledger import FALLBACK_ACCOUNT, as_utc
from pocketledger.storage.base import Storage

logger = structlog.get_logger(__name__)

EDIT_WINDOW_HOURS = 12
EDIT_WINDOW = timedelta(hours=EDIT_WINDOW_HOURS)
TRANSFER_CATEGORY = "Transfer"
# Amounts are stored with two decimal places
AMOUNT_EXPONENT = -2

INCOME_CATEGORIES = ("Salary", "Freelance", "Investment", "Gift", "Other")
EXPENSE_CATEGORIES = (
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
    "Education",
    "Other",
)

# Fields an income/expense record may have amended
EDITABLE_FIELDS = frozenset(
    {"kind", "amount", "category", "division", "account", "description", "occurred_at"}
)
# Fields a transfer leg may have amended; applied to both legs
TRANSFER_EDITABLE_FIELDS = frozenset({"amount", "description", "occurred_at"})


def validate_amount(amount: Any) -> Decimal:
    """Coerce ``amount`` to a positive Decimal.

    Raises:
        ValidationError: If amount is missing, not a number, not positive,
            or has more than two decimal places
    """
    if amount is None or amount == "":
        raise ValidationError(missing_field("amount"))
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: '{amount}'") from None
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be greater than zero")
    if value.normalize().as_tuple().exponent < AMOUNT_EXPONENT:
        raise ValidationError("Amount cannot have more than two decimal places")
    return value


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(missing_field(field_name))
    return str(value).strip()


def build_transfer_pair(
    owner_id: str,
    from_account: str,
    to_account: str,
    amount: Any,
    now: datetime,
    description: Optional[str] = None,
) -> tuple[Transaction, Transaction]:
    """Build the debit and credit legs of a transfer.

    Args:
        owner_id: Owning user
        from_account: Account the money leaves
        to_account: Account the money enters
        amount: Positive amount moved
        now: Creation time, also used as the transfer's date
        description: Optional description (defaults to "Transfer from X to Y")

    Returns:
        Tuple of (debit leg, credit leg) sharing one transfer_group_id

    Raises:
        ValidationError: If an account is missing, both accounts are the same,
            or amount is not positive
    """
    from_account = _require_text(from_account, "from_account")
    to_account = _require_text(to_account, "to_account")
    if from_account == to_account:
        raise ValidationError("Cannot transfer to the same account")
    value = validate_amount(amount)
    now = as_utc(now)

    group_id = uuid.uuid4().hex
    common = dict(
        owner_id=owner_id,
        kind=TransactionKind.TRANSFER,
        amount=value,
        category=TRANSFER_CATEGORY,
        division=Division.PERSONAL,
        description=description or f"Transfer from {from_account} to {to_account}",
        occurred_at=now,
        created_at=now,
        from_account=from_account,
        to_account=to_account,
        transfer_group_id=group_id,
    )
    debit = Transaction(id=f"{group_id}-out", account=from_account, **common)
    credit = Transaction(id=f"{group_id}-in", account=to_account, **common)
    return debit, credit


class TransactionService:
    """Service for managing an owner's transactions."""

    def __init__(self, storage: Storage):
        """Initialize transaction service.

        Args:
            storage: Storage instance
        """
        self.storage = storage

    def create_transaction(
        self,
        owner_id: str,
        kind: str | TransactionKind,
        amount: Any,
        category: str,
        division: str | Division,
        occurred_at: Optional[date | datetime],
        account: Optional[str] = None,
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Transaction:
        """Create an income or expense transaction.

        Args:
            owner_id: Owning user
            kind: "income" or "expense"
            amount: Positive amount
            category: Category label
            division: "Personal" or "Office"
            occurred_at: Date the transaction happened
            account: Account name (defaults to Cash)
            description: Optional description
            now: Creation time (defaults to current UTC time)

        Returns:
            The created transaction

        Raises:
            ValidationError: If a field is missing or invalid, or kind is transfer
        """
        if kind is None or kind == "":
            raise ValidationError(missing_field("type"))
        kind = TransactionKind.parse(kind)
        if kind == TransactionKind.TRANSFER:
            raise ValidationError("Use a transfer to move money between accounts")
        if occurred_at is None:
            raise ValidationError(missing_field("date"))
        if division is None or division == "":
            raise ValidationError(missing_field("division"))

        now = as_utc(now) if now else datetime.now(UTC)
        txn = Transaction(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            kind=kind,
            amount=validate_amount(amount),
            category=_require_text(category, "category"),
            division=Division.parse(division),
            account=(account or "").strip() or FALLBACK_ACCOUNT,
            description=description,
            occurred_at=as_utc(occurred_at),
            created_at=now,
        )

        transactions = self.storage.get_transactions(owner_id)
        transactions.append(txn)
        self.storage.put_transactions(owner_id, transactions)

        logger.info(
            "transaction_created",
            owner_id=owner_id,
            transaction_id=txn.id,
            kind=txn.kind.value,
            account=txn.account,
        )
        return txn

    def create_transfer(
        self,
        owner_id: str,
        from_account: str,
        to_account: str,
        amount: Any,
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> tuple[Transaction, Transaction]:
        """Create a transfer as a linked pair of records.

        Both legs are written in the same put, so neither can exist alone.

        Raises:
            ValidationError: If the transfer is invalid
        """
        now = as_utc(now) if now else datetime.now(UTC)
        debit, credit = build_transfer_pair(
            owner_id=owner_id,
            from_account=from_account,
            to_account=to_account,
            amount=amount,
            now=now,
            description=description,
        )

        transactions = self.storage.get_transactions(owner_id)
        transactions.extend([debit, credit])
        self.storage.put_transactions(owner_id, transactions)

        logger.info(
            "transfer_created",
            owner_id=owner_id,
            transfer_group_id=debit.transfer_group_id,
            from_account=debit.from_account,
            to_account=debit.to_account,
        )
        return debit, credit

    def get_transaction(self, owner_id: str, transaction_id: str) -> Transaction:
        """Get one of the owner's transactions by ID.

        Raises:
            NotFoundError: If the owner has no such transaction
        """
        for txn in self.storage.get_transactions(owner_id):
            if txn.id == transaction_id:
                return txn
        raise NotFoundError(transaction_not_found(transaction_id))

    def list_transactions(
        self,
        owner_id: str,
        start: Optional[date | datetime] = None,
        end: Optional[date | datetime] = None,
        category: Optional[str] = None,
        division: Optional[str | Division] = None,
        kind: Optional[str | TransactionKind] = None,
    ) -> list[Transaction]:
        """List the owner's transactions, newest first.

        Args:
            owner_id: Owning user
            start: Optional inclusive start (a date means start of that day)
            end: Optional inclusive end (a date means the whole of that day)
            category: Optional exact category filter
            division: Optional division filter
            kind: Optional kind filter

        Returns:
            List of transactions sorted by occurred_at, descending
        """
        division = Division.parse(division) if division else None
        kind = TransactionKind.parse(kind) if kind else None
        start_at = as_utc(start) if start is not None else None
        end_at = None
        if end is not None:
            end_at = as_utc(end)
            if not isinstance(end, datetime):
                end_at = end_at + timedelta(days=1) - timedelta(microseconds=1)

        results = []
        for txn in self.storage.get_transactions(owner_id):
            if start_at is not None and txn.occurred_at < start_at:
                continue
            if end_at is not None and txn.occurred_at > end_at:
                continue
            if category is not None and txn.category != category:
                continue
            if division is not None and txn.division != division:
                continue
            if kind is not None and txn.kind != kind:
                continue
            results.append(txn)

        return sorted(results, key=lambda txn: txn.occurred_at, reverse=True)

    def update_transaction(
        self,
        owner_id: str,
        transaction_id: str,
        now: Optional[datetime] = None,
        **changes: Any,
    ) -> Transaction:
        """Amend a transaction within the edit window.

        Fields set to None in ``changes`` are left unchanged. Transfer legs
        accept only amount, description and occurred_at, and the change is
        applied to both legs of the pair.

        Args:
            owner_id: Owning user
            transaction_id: Transaction ID to amend
            now: Time of the amendment (defaults to current UTC time)
            **changes: Field values to change

        Returns:
            The amended transaction

        Raises:
            NotFoundError: If the owner has no such transaction
            ForbiddenError: If the transaction is older than the edit window
            ValidationError: If a change is invalid
        """
        now = as_utc(now) if now else datetime.now(UTC)
        transactions = self.storage.get_transactions(owner_id)
        txn = next((t for t in transactions if t.id == transaction_id), None)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if now - txn.created_at > EDIT_WINDOW:
            logger.info(
                "edit_window_expired", owner_id=owner_id, transaction_id=transaction_id
            )
            raise ForbiddenError(edit_window_expired(EDIT_WINDOW_HOURS))

        changes = {name: value for name, value in changes.items() if value is not None}
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        values = self._validate_changes(txn, changes)
        values["updated_at"] = now

        if txn.is_transfer:
            targets = {t.id for t in transactions if t.transfer_group_id == txn.transfer_group_id}
        else:
            targets = {txn.id}

        updated = [replace(t, **values) if t.id in targets else t for t in transactions]
        self.storage.put_transactions(owner_id, updated)

        logger.info(
            "transaction_updated",
            owner_id=owner_id,
            transaction_id=transaction_id,
            fields=sorted(changes),
        )
        return next(t for t in updated if t.id == transaction_id)

    def _validate_changes(self, txn: Transaction, changes: dict[str, Any]) -> dict[str, Any]:
        """Validate and normalize amendment values for ``txn``."""
        if "kind" in changes:
            kind = TransactionKind.parse(changes["kind"])
            if (kind == TransactionKind.TRANSFER) != txn.is_transfer:
                raise ValidationError("Cannot change a transaction to or from a transfer")
            changes["kind"] = kind

        if txn.is_transfer:
            disallowed = set(changes) - TRANSFER_EDITABLE_FIELDS - {"kind"}
            if disallowed:
                raise ValidationError(
                    f"Cannot update {', '.join(sorted(disallowed))} of a transfer"
                )

        values: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "amount":
                values[name] = validate_amount(value)
            elif name == "category":
                values[name] = _require_text(value, "category")
            elif name == "division":
                values[name] = Division.parse(value)
            elif name == "account":
                values[name] = _require_text(value, "account")
            elif name == "occurred_at":
                values[name] = as_utc(value)
            else:
                values[name] = value
        return values

    def delete_transaction(self, owner_id: str, transaction_id: str) -> list[str]:
        """Delete a transaction; deleting a transfer leg deletes both legs.

        Returns:
            IDs of the deleted records

        Raises:
            NotFoundError: If the owner has no such transaction
        """
        transactions = self.storage.get_transactions(owner_id)
        txn = next((t for t in transactions if t.id == transaction_id), None)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if txn.is_transfer and txn.transfer_group_id is not None:
            deleted = [t.id for t in transactions if t.transfer_group_id == txn.transfer_group_id]
        else:
            deleted = [txn.id]

        remaining = [t for t in transactions if t.id not in deleted]
        self.storage.put_transactions(owner_id, remaining)

        logger.info("transaction_deleted", owner_id=owner_id, transaction_ids=deleted)
        return deleted

"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ledger code only ever sees
frozen domain entities with timezone-aware timestamps.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from pocketledger.domain import entities as domain
from pocketledger.storage.models import (
    SessionRecord,
    TransactionRecord,
    UserRecord,
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps (SQLite drops tzinfo)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def user_to_domain(record: UserRecord) -> domain.User:
    """Convert SQLAlchemy UserRecord model to domain User entity."""
    return domain.User(
        email=record.email,
        name=record.name,
        password_hash=record.password_hash,
        created_at=as_utc(record.created_at),
    )


def user_to_record(user: domain.User) -> UserRecord:
    """Convert domain User entity to a SQLAlchemy UserRecord."""
    return UserRecord(
        email=user.email,
        name=user.name,
        password_hash=user.password_hash,
        created_at=user.created_at,
    )


def session_to_domain(record: SessionRecord) -> domain.Session:
    """Convert SQLAlchemy SessionRecord model to domain Session entity."""
    return domain.Session(
        token=record.token,
        owner_id=record.owner_id,
        created_at=as_utc(record.created_at),
        expires_at=as_utc(record.expires_at),
    )


def session_to_record(session: domain.Session) -> SessionRecord:
    """Convert domain Session entity to a SQLAlchemy SessionRecord."""
    return SessionRecord(
        token=session.token,
        owner_id=session.owner_id,
        created_at=session.created_at,
        expires_at=session.expires_at,
    )


def transaction_to_domain(record: TransactionRecord) -> domain.Transaction:
    """Convert SQLAlchemy TransactionRecord model to domain Transaction entity."""
    return domain.Transaction(
        id=record.id,
        owner_id=record.owner_id,
        kind=domain.TransactionKind(record.kind),
        amount=Decimal(record.amount),
        category=record.category,
        division=domain.Division(record.division),
        account=record.account,
        description=record.description,
        occurred_at=as_utc(record.occurred_at),
        created_at=as_utc(record.created_at),
        from_account=record.from_account,
        to_account=record.to_account,
        transfer_group_id=record.transfer_group_id,
        updated_at=as_utc(record.updated_at),
    )


def transaction_to_record(txn: domain.Transaction, position: int) -> TransactionRecord:
    """Convert domain Transaction entity to a SQLAlchemy TransactionRecord."""
    return TransactionRecord(
        id=txn.id,
        owner_id=txn.owner_id,
        position=position,
        kind=txn.kind.value,
        amount=txn.amount,
        category=txn.category,
        division=txn.division.value,
        account=txn.account,
        description=txn.description,
        occurred_at=txn.occurred_at,
        created_at=txn.created_at,
        updated_at=txn.updated_at,
        from_account=txn.from_account,
        to_account=txn.to_account,
        transfer_group_id=txn.transfer_group_id,
    )

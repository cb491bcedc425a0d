"""SQLAlchemy models for pocketledger storage."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class UserRecord(Base):
    """Registered user model."""

    __tablename__ = "users"

    email = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)


class SessionRecord(Base):
    """Login session model."""

    __tablename__ = "sessions"

    token = Column(String, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)


class TransactionRecord(Base):
    """Transaction model.

    ``position`` keeps the order in which the owner's collection was written.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False)
    kind = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)
    division = Column(String, nullable=False)
    account = Column(String, nullable=False)
    description = Column(String, nullable=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    from_account = Column(String, nullable=True)
    to_account = Column(String, nullable=True)
    transfer_group_id = Column(String, nullable=True, index=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

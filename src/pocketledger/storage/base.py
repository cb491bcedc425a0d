"""Abstract storage interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from pocketledger.domain.entities import Session, Transaction, User


class Storage(ABC):
    """Abstract key-value storage for pocketledger.

    Transactions are stored per owner as a whole collection: callers read a
    snapshot with ``get_transactions`` and write a new collection back with
    ``put_transactions``. Implementations must apply a put all-or-nothing.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transactions(self, owner_id: str) -> list[Transaction]:
        """Get all transactions of an owner, in stored order."""
        pass

    @abstractmethod
    def put_transactions(self, owner_id: str, transactions: list[Transaction]) -> None:
        """Replace all transactions of an owner."""
        pass

    # User operations
    @abstractmethod
    def get_user(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def put_user(self, user: User) -> None:
        """Create or replace a user."""
        pass

    # Session operations
    @abstractmethod
    def get_session(self, token: str) -> Optional[Session]:
        """Get session by token."""
        pass

    @abstractmethod
    def put_session(self, session: Session) -> None:
        """Create or replace a session."""
        pass

    @abstractmethod
    def delete_session(self, token: str) -> None:
        """Delete a session. Unknown tokens are ignored."""
        pass

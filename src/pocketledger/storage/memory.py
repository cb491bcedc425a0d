"""Process-local in-memory storage, for demos and tests."""

from typing import Optional

from pocketledger.domain.entities import Session, Transaction, User
from pocketledger.storage.base import Storage


class InMemoryStorage(Storage):
    """Storage backed by plain dicts that live as long as the instance."""

    def __init__(self):
        self._users: dict[str, User] = {}
        self._sessions: dict[str, Session] = {}
        self._transactions: dict[str, list[Transaction]] = {}

    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    def get_transactions(self, owner_id: str) -> list[Transaction]:
        # Entities are frozen, so a shallow copy is a full snapshot
        return list(self._transactions.get(owner_id, []))

    def put_transactions(self, owner_id: str, transactions: list[Transaction]) -> None:
        self._transactions[owner_id] = list(transactions)

    def get_user(self, email: str) -> Optional[User]:
        return self._users.get(email)

    def put_user(self, user: User) -> None:
        self._users[user.email] = user

    def get_session(self, token: str) -> Optional[Session]:
        return self._sessions.get(token)

    def put_session(self, session: Session) -> None:
        self._sessions[session.token] = session

    def delete_session(self, token: str) -> None:
        self._sessions.pop(token, None)

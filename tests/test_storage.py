"""Tests for the Storage implementations returning domain models."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

from pocketledger.domain import entities
from pocketledger.domain.transaction import build_transfer_pair
from pocketledger.storage.factories import create_sqlite_storage

NOW = datetime(2024, 1, 31, 9, 30, tzinfo=UTC)


def _expense(txn_id, owner_id="ada@example.com"):
    return entities.Transaction(
        id=txn_id,
        owner_id=owner_id,
        kind=entities.TransactionKind.EXPENSE,
        amount=Decimal("19.99"),
        category="Food",
        division=entities.Division.OFFICE,
        account="Credit Card",
        description="Team lunch",
        occurred_at=NOW - timedelta(days=1),
        created_at=NOW,
    )


class TestStorageInterface:
    """Behaviour shared by every backend."""

    def test_unknown_owner_has_no_transactions(self, storage):
        assert storage.get_transactions("nobody@example.com") == []

    def test_put_then_get_preserves_order_and_values(self, storage):
        debit, credit = build_transfer_pair("ada@example.com", "Bank", "Savings", "25", NOW)
        written = [_expense("b"), debit, _expense("a"), credit]

        storage.put_transactions("ada@example.com", written)
        loaded = storage.get_transactions("ada@example.com")

        assert loaded == written
        for txn in loaded:
            assert isinstance(txn, entities.Transaction)
            assert txn.occurred_at.tzinfo is not None

    def test_put_replaces_collection(self, storage):
        storage.put_transactions("ada@example.com", [_expense("a"), _expense("b")])
        storage.put_transactions("ada@example.com", [_expense("b")])

        assert [txn.id for txn in storage.get_transactions("ada@example.com")] == ["b"]

    def test_owners_are_isolated(self, storage):
        storage.put_transactions("ada@example.com", [_expense("a")])
        storage.put_transactions("eve@example.com", [_expense("e", owner_id="eve@example.com")])
        storage.put_transactions("eve@example.com", [])

        assert [txn.id for txn in storage.get_transactions("ada@example.com")] == ["a"]
        assert storage.get_transactions("eve@example.com") == []

    def test_returned_list_is_a_snapshot(self, storage):
        storage.put_transactions("ada@example.com", [_expense("a")])

        snapshot = storage.get_transactions("ada@example.com")
        snapshot.append(_expense("b"))

        assert len(storage.get_transactions("ada@example.com")) == 1

    def test_users_and_sessions(self, storage):
        user = entities.User(
            email="ada@example.com", name="Ada", password_hash="hash", created_at=NOW
        )
        session = entities.Session(
            token="tok", owner_id=user.email, created_at=NOW, expires_at=NOW + timedelta(days=7)
        )

        assert storage.get_user(user.email) is None
        storage.put_user(user)
        storage.put_session(session)

        assert storage.get_user(user.email) == user
        assert storage.get_session("tok") == session

        storage.delete_session("tok")
        storage.delete_session("tok")
        assert storage.get_session("tok") is None


def test_sqlite_storage_persists_across_instances(tmp_path):
    db_path = str(tmp_path / "ledger.db")
    first = create_sqlite_storage(database_path=db_path)
    first.put_transactions("ada@example.com", [_expense("a")])
    first.disconnect()

    second = create_sqlite_storage(database_path=db_path)
    try:
        assert second.get_transactions("ada@example.com") == [_expense("a")]
    finally:
        second.disconnect()


def test_sqlite_storage_uses_env_path(tmp_path, monkeypatch):
    db_path = tmp_path / "from-env.db"
    monkeypatch.setenv("POCKETLEDGER_DB_PATH", str(db_path))

    storage = create_sqlite_storage()

    assert storage.database_url == f"sqlite:///{db_path}"

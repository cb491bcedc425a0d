"""Shared pytest fixtures for pocketledger tests."""

import tempfile
import os
from datetime import datetime, UTC
import pytest

from pocketledger.storage.factories import create_memory_storage, create_sqlite_storage
from pocketledger.domain.account import AccountService
from pocketledger.domain.analytics import AnalyticsService
from pocketledger.domain.transaction import TransactionService
from pocketledger.domain.user import UserService


@pytest.fixture
def temp_storage():
    """Create a temporary SQLite storage for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()

    yield storage

    # Cleanup
    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_storage():
    """Create an empty in-memory storage."""
    return create_memory_storage()


@pytest.fixture(params=["memory", "sqlite"])
def storage(request):
    """Run a test against every storage backend."""
    return request.getfixturevalue(
        "memory_storage" if request.param == "memory" else "temp_storage"
    )


@pytest.fixture
def transaction_service(storage):
    """Create a TransactionService over the parametrized storage."""
    return TransactionService(storage)


@pytest.fixture
def account_service(storage):
    """Create an AccountService over the parametrized storage."""
    return AccountService(storage)


@pytest.fixture
def analytics_service(storage):
    """Create an AnalyticsService over the parametrized storage."""
    return AnalyticsService(storage)


@pytest.fixture
def user_service(storage):
    """Create a UserService over the parametrized storage."""
    return UserService(storage)


@pytest.fixture
def owner_id():
    """Owner id used by service tests."""
    return "ada@example.com"


@pytest.fixture
def now():
    """Fixed reference time for tests."""
    return datetime(2024, 1, 31, 12, 0, tzinfo=UTC)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_paths(tmp_path):
    """Global CLI options pointing at a throwaway database and session file."""
    return [
        "--db-path",
        str(tmp_path / "pocketledger.db"),
        "--session-file",
        str(tmp_path / "session"),
    ]


@pytest.fixture
def logged_in(cli_runner, cli_paths):
    """Register and log in a user through the CLI; return an invoke helper."""
    from pocketledger.cli.main import cli

    result = cli_runner.invoke(
        cli,
        cli_paths
        + ["register", "--email", "ada@example.com", "--name", "Ada", "--password", "s3cret"],
    )
    assert result.exit_code == 0, result.output

    def invoke(*args, **kwargs):
        return cli_runner.invoke(cli, cli_paths + list(args), **kwargs)

    return invoke

"""Tests for CLI commands."""

import json
from datetime import datetime, timedelta, UTC

from pocketledger.cli.main import cli
from pocketledger.domain.transaction import TransactionService
from pocketledger.storage.factories import create_sqlite_storage

OWNER = "ada@example.com"


def _stored(cli_paths):
    """Read the owner's transactions straight from the CLI's database."""
    storage = create_sqlite_storage(database_path=cli_paths[1])
    try:
        return storage.get_transactions(OWNER)
    finally:
        storage.disconnect()


class TestAuthCommands:
    """Tests for register, login, logout and whoami."""

    def test_register_logs_in(self, logged_in):
        result = logged_in("whoami")

        assert result.exit_code == 0
        assert "Ada <ada@example.com>" in result.output

    def test_register_duplicate(self, logged_in):
        result = logged_in(
            "register", "--email", OWNER, "--name", "Ada", "--password", "other"
        )

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_logout_then_commands_fail(self, logged_in):
        result = logged_in("logout")
        assert result.exit_code == 0
        assert "Logged out" in result.output

        result = logged_in("accounts")
        assert result.exit_code == 1
        assert "Not logged in" in result.output

    def test_login_wrong_password(self, logged_in):
        logged_in("logout")

        result = logged_in("login", "--email", OWNER, "--password", "wrong")

        assert result.exit_code == 1
        assert "Invalid credentials" in result.output

    def test_login_again(self, logged_in):
        logged_in("logout")

        result = logged_in("login", "--email", OWNER, "--password", "s3cret")

        assert result.exit_code == 0
        assert "Logged in as Ada" in result.output

    def test_commands_require_login(self, cli_runner, cli_paths):
        result = cli_runner.invoke(cli, cli_paths + ["analytics"])

        assert result.exit_code == 1
        assert "Not logged in" in result.output


class TestTransactionCommands:
    """Tests for add, transfer and transaction subcommands."""

    def test_add_transaction(self, logged_in, cli_paths):
        result = logged_in(
            "add",
            "--type",
            "expense",
            "--amount",
            "$12.50",
            "--category",
            "Food",
            "--date",
            "2024-01-15",
            "--description",
            "Lunch",
        )

        assert result.exit_code == 0, result.output
        assert "Created transaction" in result.output
        assert "Amount: $12.50" in result.output

        stored = _stored(cli_paths)
        assert len(stored) == 1
        assert stored[0].category == "Food"
        assert stored[0].occurred_at == datetime(2024, 1, 15, tzinfo=UTC)

    def test_add_rejects_bad_amount(self, logged_in, cli_paths):
        result = logged_in("add", "--type", "income", "--amount=-5", "--category", "Gift")

        assert result.exit_code == 1
        assert "Invalid amount format" in result.output
        assert _stored(cli_paths) == []

    def test_add_rejects_bad_division(self, logged_in):
        result = logged_in(
            "add", "--type", "income", "--amount", "5", "--category", "Gift", "--division", "Home"
        )

        assert result.exit_code == 1
        assert "Unknown division" in result.output

    def test_transfer_and_accounts(self, logged_in):
        logged_in("add", "--type", "income", "--amount", "100", "--category", "Salary")
        result = logged_in("transfer", "--from", "Cash", "--to", "Bank", "--amount", "50")
        assert result.exit_code == 0, result.output
        assert "Cash -> Bank: $50.00" in result.output

        result = logged_in("accounts", "--json")

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        balances = {account["name"]: account["balance"] for account in payload["accounts"]}
        assert balances == {"Cash": 50.0, "Bank": 50.0, "Savings": 0.0, "Credit Card": 0.0}
        assert payload["totalBalance"] == 100.0

    def test_transfer_prompts_with_known_accounts(self, logged_in):
        result = logged_in("transfer", "--amount", "20", input="Bank\nWallet\n")

        assert result.exit_code == 0, result.output
        assert "From account (Cash, Bank, Savings, Credit Card)" in result.output
        assert "Bank -> Wallet: $20.00" in result.output

        result = logged_in("transfer", "--to", "Cash", "--amount", "5", input="Wallet\n")

        assert result.exit_code == 0, result.output
        assert "From account (Cash, Bank, Savings, Credit Card, Wallet)" in result.output

    def test_add_rejects_sub_cent_amount(self, logged_in, cli_paths):
        result = logged_in(
            "add", "--type", "expense", "--amount", "0.004", "--category", "Food"
        )

        assert result.exit_code == 1
        assert "two decimal places" in result.output
        assert _stored(cli_paths) == []

    def test_add_help_lists_categories(self, cli_runner, cli_paths):
        result = cli_runner.invoke(cli, cli_paths + ["add", "--help"])

        assert result.exit_code == 0
        for name in ("Salary", "Freelance", "Food", "Entertainment"):
            assert name in result.output

    def test_transfer_to_same_account(self, logged_in):
        result = logged_in("transfer", "--from", "Cash", "--to", "Cash", "--amount", "5")

        assert result.exit_code == 1
        assert "same account" in result.output

    def test_accounts_table(self, logged_in):
        result = logged_in("accounts")

        assert result.exit_code == 0
        for name in ("Cash", "Bank", "Savings", "Credit Card", "Total"):
            assert name in result.output

    def test_list_and_show(self, logged_in, cli_paths):
        logged_in("add", "--type", "expense", "--amount", "9", "--category", "Transport")
        txn = _stored(cli_paths)[0]

        result = logged_in("transaction", "list")
        assert result.exit_code == 0
        assert txn.id in result.output
        assert "Count: 1" in result.output

        result = logged_in("transaction", "show", txn.id)
        assert result.exit_code == 0
        assert "Category: Transport" in result.output

    def test_list_empty(self, logged_in):
        result = logged_in("transaction", "list")

        assert result.exit_code == 0
        assert "No transactions found" in result.output

    def test_update_within_window(self, logged_in, cli_paths):
        logged_in("add", "--type", "expense", "--amount", "9", "--category", "Transport")
        txn = _stored(cli_paths)[0]

        result = logged_in("transaction", "update", txn.id, "--amount", "11", "--category", "Bills")

        assert result.exit_code == 0, result.output
        updated = _stored(cli_paths)[0]
        assert updated.amount == 11
        assert updated.category == "Bills"
        assert updated.updated_at is not None

    def test_update_after_window(self, logged_in, cli_paths):
        storage = create_sqlite_storage(database_path=cli_paths[1])
        txn = TransactionService(storage).create_transaction(
            owner_id=OWNER,
            kind="expense",
            amount="9",
            category="Food",
            division="Personal",
            occurred_at=datetime.now(UTC),
            now=datetime.now(UTC) - timedelta(hours=13),
        )
        storage.disconnect()

        result = logged_in("transaction", "update", txn.id, "--amount", "11")

        assert result.exit_code == 1
        assert "Cannot edit transaction after 12 hours" in result.output

    def test_update_missing(self, logged_in):
        result = logged_in("transaction", "update", "missing", "--amount", "11")

        assert result.exit_code == 1
        assert "Transaction missing not found" in result.output

    def test_delete_transfer_removes_both_legs(self, logged_in, cli_paths):
        logged_in("transfer", "--from", "Bank", "--to", "Savings", "--amount", "20")
        leg = _stored(cli_paths)[0]

        result = logged_in("transaction", "delete", leg.id, input="y\n")

        assert result.exit_code == 0, result.output
        assert result.output.count("Deleted transaction") == 2
        assert _stored(cli_paths) == []

    def test_delete_cancelled(self, logged_in, cli_paths):
        logged_in("add", "--type", "expense", "--amount", "9", "--category", "Transport")
        txn = _stored(cli_paths)[0]

        result = logged_in("transaction", "delete", txn.id, input="n\n")

        assert result.exit_code == 0
        assert "Deletion cancelled" in result.output
        assert len(_stored(cli_paths)) == 1


class TestAnalyticsCommand:
    """Tests for the analytics command."""

    def test_analytics_json(self, logged_in):
        logged_in(
            "add", "--type", "income", "--amount", "100", "--category", "Salary", "--date", "2024-01-05"
        )
        logged_in(
            "add", "--type", "expense", "--amount", "40", "--category", "Food", "--date", "2024-01-06"
        )
        logged_in("transfer", "--from", "Cash", "--to", "Bank", "--amount", "50")

        result = logged_in("analytics", "--period", "monthly", "--as-of", "2024-01-31", "--json")

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["period"] == "monthly"
        assert payload["data"] == {"2024-01": {"income": 100.0, "expense": 40.0}}
        assert payload["summary"] == {"totalIncome": 100.0, "totalExpense": 40.0}
        assert "Transfer" not in payload["categories"]

    def test_analytics_table(self, logged_in):
        logged_in(
            "add", "--type", "income", "--amount", "100", "--category", "Salary", "--date", "2024-01-05"
        )

        result = logged_in("analytics", "--period", "yearly", "--as-of", "2024-06-01")

        assert result.exit_code == 0
        assert "Analytics (yearly)" in result.output
        assert "2024" in result.output
        assert "Salary" in result.output

    def test_analytics_empty(self, logged_in):
        result = logged_in("analytics", "--period", "daily")

        assert result.exit_code == 0
        assert "No income or expenses" in result.output

    def test_analytics_unknown_period(self, logged_in):
        result = logged_in("analytics", "--period", "biweekly")

        assert result.exit_code == 1
        assert "Unknown period: 'biweekly'" in result.output

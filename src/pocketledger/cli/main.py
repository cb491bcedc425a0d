"""Main CLI entry point."""

import click

from pocketledger.cli.session import resolve_session_file
from pocketledger.logging_config import configure_logging
from pocketledger.storage.factories import create_sqlite_storage

# Import and register all commands at module level
from pocketledger.cli.commands import (
    auth,
    add,
    transfer,
    transaction,
    account,
    analytics,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar="POCKETLEDGER_DB_PATH",
)
@click.option(
    "--session-file",
    type=click.Path(),
    help="Path to session token file (overrides POCKETLEDGER_SESSION_FILE environment variable)",
    envvar="POCKETLEDGER_SESSION_FILE",
)
@click.option("--verbose", "-v", is_flag=True, help="Log what each command does to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, session_file: str | None, verbose: bool):
    """Pocketledger - Personal finance tracker.

    Record income, expenses and transfers across your accounts, and see
    balances and income/expense analytics by day, week, month or year.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        ctx.call_on_close(storage.disconnect)
        ctx.obj["storage"] = storage
        ctx.obj["session_file"] = resolve_session_file(session_file)


# Register all commands
auth.register_commands(cli)
add.register_commands(cli)
transfer.register_commands(cli)
transaction.register_commands(cli)
account.register_commands(cli)
analytics.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

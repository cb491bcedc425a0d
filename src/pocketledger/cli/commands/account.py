"""Account balance command."""

import json

import click

from pocketledger.cli.session import require_owner
from pocketledger.domain.account import AccountService


@click.command("accounts")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def accounts(ctx, as_json: bool):
    """Show the balance of every account.

    Cash, Bank, Savings and Credit Card are always listed, even when unused.
    """
    owner_id = require_owner(ctx)
    report = AccountService(ctx.obj["storage"]).get_accounts(owner_id)

    if as_json:
        click.echo(json.dumps(report.to_payload(), indent=2))
        return

    click.echo("\nAccounts:")
    click.echo("-" * 40)
    for account in report.accounts:
        balance_str = f"${account.balance:,.2f}"
        click.echo(f"{account.name:<24} {balance_str:>15}")
    click.echo("-" * 40)
    total_str = f"${report.total_balance:,.2f}"
    click.echo(f"{'Total':<24} {total_str:>15}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(accounts)

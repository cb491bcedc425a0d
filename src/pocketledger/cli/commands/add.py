"""Add transaction command."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.session import require_owner
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transaction import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    TransactionService,
)
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date, start_of_day


@click.command("add")
@click.option(
    "--type",
    "kind",
    required=True,
    type=click.Choice(["income", "expense"]),
    help="Transaction type",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option(
    "--category",
    required=True,
    help=f"Category. Income: {', '.join(INCOME_CATEGORIES)}. "
    f"Expense: {', '.join(EXPENSE_CATEGORIES)}",
)
@click.option(
    "--division",
    default="Personal",
    show_default=True,
    help="Division (Personal or Office)",
)
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--account", default="Cash", show_default=True, help="Account name")
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    amount: str,
    category: str,
    division: str,
    date: str,
    account: str,
    description: str | None,
):
    """Add an income or expense transaction.

    Examples:
        pocketledger add --type income --amount 2500 --category Salary --account Bank
        pocketledger add --type expense --amount 12.50 --category Food --date yesterday
    """
    owner_id = require_owner(ctx)
    service = TransactionService(ctx.obj["storage"])

    # Parse date
    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = service.create_transaction(
            owner_id=owner_id,
            kind=kind,
            amount=txn_amount,
            category=category,
            division=division,
            occurred_at=start_of_day(txn_date),
            account=account,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Type: {txn.kind.value}")
    click.echo(f"  Account: {txn.account}")
    click.echo(f"  Date: {txn.occurred_at.date()}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    click.echo(f"  Category: {txn.category}")
    if description:
        click.echo(f"  Description: {description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)

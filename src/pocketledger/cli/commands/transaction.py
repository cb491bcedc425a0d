"""Transaction management commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.session import require_owner
from pocketledger.domain.entities import TransactionKind
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transaction import TransactionService
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date, start_of_day


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Only transactions with this category")
@click.option("--division", help="Only transactions in this division (Personal or Office)")
@click.option(
    "--type",
    "kind",
    type=click.Choice([kind.value for kind in TransactionKind]),
    help="Only transactions of this type",
)
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each transaction")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    division: str | None,
    kind: str | None,
    verbose: bool,
):
    """View transactions with optional filters, newest first."""
    owner_id = require_owner(ctx)
    service = TransactionService(ctx.obj["storage"])

    # Parse dates
    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    try:
        transactions = service.list_transactions(
            owner_id, start=start, end=end, category=category, division=division, kind=kind
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            _echo_details(txn)
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<34} {'Date':<12} {'Type':<9} {'Amount':>12} {'Account':<14} {'Category':<14}"
        )
        click.echo("-" * 100)
        for txn in transactions:
            amount_str = f"${txn.amount:,.2f}"
            click.echo(
                f"{txn.id:<34} {str(txn.occurred_at.date()):<12} {txn.kind.value:<9} "
                f"{amount_str:>12} {txn.account:<14} {txn.category:<14}"
            )

    # Show totals
    total_income = sum(t.amount for t in transactions if t.kind == TransactionKind.INCOME)
    total_expense = sum(t.amount for t in transactions if t.kind == TransactionKind.EXPENSE)
    click.echo("-" * 100)
    click.echo(
        f"TOTAL  Income: ${total_income:,.2f} | Expenses: ${total_expense:,.2f} | "
        f"Count: {len(transactions)}"
    )


def _echo_details(txn) -> None:
    click.echo(f"\nTransaction ID: {txn.id}")
    click.echo(f"  Type: {txn.kind.value}")
    click.echo(f"  Date: {txn.occurred_at.date()}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    click.echo(f"  Account: {txn.account}")
    if txn.is_transfer:
        click.echo(f"  Transfer: {txn.from_account} -> {txn.to_account}")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Division: {txn.division.value}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    click.echo(f"  Created: {txn.created_at:%Y-%m-%d %H:%M}")
    if txn.updated_at:
        click.echo(f"  Updated: {txn.updated_at:%Y-%m-%d %H:%M}")


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str) -> None:
    """Show every field of one transaction."""
    owner_id = require_owner(ctx)
    service = TransactionService(ctx.obj["storage"])

    try:
        txn = service.get_transaction(owner_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _echo_details(txn)


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--type", "kind", type=click.Choice(["income", "expense"]), help="Transaction type")
@click.option("--amount", help="Transaction amount (e.g., 123.45)")
@click.option("--category", help="Category")
@click.option("--division", help="Division (Personal or Office)")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--account", help="Account name")
@click.option("--description", help="Transaction description")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    kind: str | None,
    amount: str | None,
    category: str | None,
    division: str | None,
    date: str | None,
    account: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Transactions can only be
    edited within 12 hours of being created. For a transfer, only amount,
    date and description can change, and both sides are updated.

    Examples:
        pocketledger transaction update 1f0c... --amount 75.00
        pocketledger transaction update 1f0c... --category Bills --division Office
    """
    owner_id = require_owner(ctx)
    service = TransactionService(ctx.obj["storage"])

    # Parse date if provided
    occurred_at = None
    if date is not None:
        try:
            occurred_at = start_of_day(parse_date(date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    # Parse amount if provided
    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_transaction(
            owner_id,
            transaction_id,
            kind=kind,
            amount=txn_amount,
            category=category,
            division=division,
            occurred_at=occurred_at,
            account=account,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction.

    Deleting either side of a transfer deletes the whole transfer.

    Examples:
        pocketledger transaction delete 1f0c...
    """
    owner_id = require_owner(ctx)
    service = TransactionService(ctx.obj["storage"])

    # Get transaction info for display
    try:
        txn = service.get_transaction(owner_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    prompt = f"Are you sure you want to delete transaction {transaction_id}?"
    if txn.is_transfer:
        prompt = (
            f"This deletes the whole transfer {txn.from_account} -> {txn.to_account}. "
            "Continue?"
        )

    # Confirm deletion
    if not yes and not click.confirm(prompt):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_transaction(owner_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for deleted_id in deleted:
        click.echo(f"Deleted transaction {deleted_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")

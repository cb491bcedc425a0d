"""Transfer command."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.session import require_owner
from pocketledger.domain.account import AccountService
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transaction import TransactionService
from pocketledger.utils.amount_parser import parse_amount


@click.command("transfer")
@click.option("--from", "from_account", help="Account the money leaves (prompted if omitted)")
@click.option("--to", "to_account", help="Account the money enters (prompted if omitted)")
@click.option("--amount", required=True, help="Amount to move (e.g., 100.00)")
@click.option("--description", help="Description (defaults to 'Transfer from X to Y')")
@click.pass_context
def transfer(
    ctx,
    from_account: str | None,
    to_account: str | None,
    amount: str,
    description: str | None,
):
    """Move money between two accounts.

    Missing accounts are prompted for, listing the accounts already known.
    A new name opens a new account.

    Examples:
        pocketledger transfer --from Bank --to Savings --amount 500
        pocketledger transfer --amount 20
    """
    owner_id = require_owner(ctx)
    service = TransactionService(ctx.obj["storage"])

    try:
        transfer_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if not from_account or not to_account:
        known = ", ".join(AccountService(ctx.obj["storage"]).list_account_names(owner_id))
        if not from_account:
            from_account = click.prompt(f"From account ({known})")
        if not to_account:
            to_account = click.prompt(f"To account ({known})")

    try:
        debit, credit = service.create_transfer(
            owner_id=owner_id,
            from_account=from_account,
            to_account=to_account,
            amount=transfer_amount,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transfer {debit.transfer_group_id}")
    click.echo(f"  {debit.account} -> {credit.account}: ${debit.amount:,.2f}")


def register_commands(cli):
    """Register transfer command with main CLI."""
    cli.add_command(transfer)

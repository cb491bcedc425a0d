"""Registration and login commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.session import clear_token, read_token, require_owner, write_token
from pocketledger.domain.errors import DomainError
from pocketledger.domain.user import UserService


@click.command("register")
@click.option("--email", required=True, help="Email address (used to log in)")
@click.option("--name", required=True, help="Display name")
@click.password_option(help="Password (prompted if not given)")
@click.pass_context
def register(ctx, email: str, name: str, password: str):
    """Register a new user and log in.

    Examples:
        pocketledger register --email ada@example.com --name "Ada"
    """
    service = UserService(ctx.obj["storage"])

    try:
        user = service.register(email=email, name=name, password=password)
        session = service.login(email=user.email, password=password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    write_token(ctx.obj["session_file"], session.token)
    click.echo(f"Registered '{user.email}'")
    click.echo(f"Logged in as {user.name}")


@click.command("login")
@click.option("--email", required=True, help="Email address")
@click.option("--password", prompt=True, hide_input=True, help="Password (prompted if not given)")
@click.pass_context
def login(ctx, email: str, password: str):
    """Log in and store a session token."""
    service = UserService(ctx.obj["storage"])

    try:
        session = service.login(email=email, password=password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    write_token(ctx.obj["session_file"], session.token)
    user = service.get_user(session.owner_id)
    click.echo(f"Logged in as {user.name}")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """End the current session."""
    session_file = ctx.obj["session_file"]
    token = read_token(session_file)
    if token is None:
        click.echo("Not logged in.")
        return

    UserService(ctx.obj["storage"]).logout(token)
    clear_token(session_file)
    click.echo("Logged out.")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the logged-in user."""
    owner_id = require_owner(ctx)
    user = UserService(ctx.obj["storage"]).get_user(owner_id)
    click.echo(f"{user.name} <{user.email}>")


def register_commands(cli):
    """Register auth commands with main CLI."""
    cli.add_command(register)
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)

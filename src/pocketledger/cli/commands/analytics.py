"""Analytics command."""

import json

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.session import require_owner
from pocketledger.domain.analytics import AnalyticsService, DEFAULT_PERIOD
from pocketledger.domain.errors import DomainError
from pocketledger.utils.date_parser import parse_date, start_of_day


@click.command("analytics")
@click.option(
    "--period",
    default=DEFAULT_PERIOD.value,
    show_default=True,
    help="Bucket size: daily (last 7 days), weekly (last 30 days), "
    "monthly (last 12 months) or yearly (last 5 years)",
)
@click.option("--as-of", help="Measure the lookback from this date instead of now")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def analytics(ctx, period: str, as_of: str | None, as_json: bool):
    """Show income and expense totals per period and per category.

    Transfers are not included.

    Examples:
        pocketledger analytics
        pocketledger analytics --period weekly
        pocketledger analytics --period yearly --as-of 2024-12-31 --json
    """
    owner_id = require_owner(ctx)
    service = AnalyticsService(ctx.obj["storage"])

    now = None
    if as_of:
        try:
            now = start_of_day(parse_date(as_of))
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    try:
        report = service.get_analytics(owner_id, period=period, now=now)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(json.dumps(report.to_payload(), indent=2))
        return

    click.echo(f"\nAnalytics ({report.period.value}):")
    if not report.series:
        click.echo("No income or expenses in this period.")
        return

    click.echo("-" * 50)
    click.echo(f"{'Period':<14} {'Income':>17} {'Expense':>17}")
    click.echo("-" * 50)
    for key, totals in report.series.items():
        click.echo(f"{key:<14} {_money(totals.income):>17} {_money(totals.expense):>17}")

    click.echo("\nBy category:")
    click.echo("-" * 50)
    for name, totals in report.categories.items():
        click.echo(f"{name:<14} {_money(totals.income):>17} {_money(totals.expense):>17}")

    click.echo("-" * 50)
    click.echo(
        f"{'Total':<14} {_money(report.total_income):>17} {_money(report.total_expense):>17}"
    )


def _money(value) -> str:
    return f"${value:,.2f}"


def register_commands(cli):
    """Register analytics command with main CLI."""
    cli.add_command(analytics)

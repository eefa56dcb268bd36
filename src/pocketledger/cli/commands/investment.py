"""Investment commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.entities import InvestmentCategory
from pocketledger.domain.errors import DomainError
from pocketledger.domain.summary import investments_by_category
from pocketledger.utils.formatters import format_currency, format_date

CATEGORY_CHOICES = [c.value for c in InvestmentCategory]


@click.group()
def investment_group():
    """Track investment deposits and withdrawals."""
    pass


@investment_group.command("add")
@click.option("--type", "investment_type", default="deposit", show_default=True, type=click.Choice(["deposit", "withdrawal"]), help="Deposit or withdrawal")
@click.option("--category", default="CDI", show_default=True, help=f"One of: {', '.join(CATEGORY_CHOICES)}")
@click.option("--amount", required=True, help="Amount (e.g., 1000,00)")
@click.option("--description", required=True, help="Investment description")
@click.option("--date", "date_str", default="today", show_default=True, help="Date (YYYY-MM-DD, DD/MM/YYYY, 'today')")
@click.pass_context
def add_investment(ctx, investment_type: str, category: str, amount: str, description: str, date_str: str):
    """Add an investment entry. Bank balances are not affected."""
    ledger = ctx.obj["ledger"]

    try:
        investment = ledger.add_investment(
            date=date_str,
            description=description,
            amount=amount,
            type=investment_type,
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added {investment.type.value} {investment.id}")
    click.echo(f"  Category: {investment.category.value}")
    click.echo(f"  Amount: {format_currency(investment.amount)}")


@investment_group.command("list")
@click.pass_context
def list_investments(ctx):
    """List investments with totals per category."""
    ledger = ctx.obj["ledger"]

    try:
        investments = ledger.list_investments()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not investments:
        click.echo("No investments found.")
        return

    for investment in investments:
        click.echo(
            f"{investment.id:22s} | {format_date(investment.date):10s} | {investment.category.value:10s} | "
            f"{investment.description[:25]:25s} | {format_currency(investment.signed_amount):>15s}"
        )

    click.echo("\nBy category:")
    totals = investments_by_category(investments)
    for category, total in totals.items():
        click.echo(f"  {category:12s} {format_currency(total):>15s}")
    click.echo(f"  {'Total':12s} {format_currency(sum(totals.values())):>15s}")


@investment_group.command("delete")
@click.argument("investment_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_investment(ctx, investment_id: str, yes: bool):
    """Delete an investment entry."""
    ledger = ctx.obj["ledger"]

    if not yes and not click.confirm(f"Are you sure you want to delete investment {investment_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_investment(investment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted investment {investment_id}")


def register_commands(cli):
    """Register investment commands with main CLI."""
    cli.add_command(investment_group, name="investment")

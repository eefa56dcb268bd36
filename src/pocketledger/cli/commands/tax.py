"""Tax commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.entities import TaxType
from pocketledger.domain.errors import DomainError
from pocketledger.utils.formatters import format_currency, format_date

TYPE_CHOICES = [t.value for t in TaxType]


@click.group()
def tax_group():
    """Manage tax obligations."""
    pass


@tax_group.command("add")
@click.option("--type", "tax_type", default="DAS", show_default=True, help=f"One of: {', '.join(TYPE_CHOICES)}")
@click.option("--amount", required=True, help="Amount (e.g., 71,60)")
@click.option("--description", required=True, help="Tax description")
@click.option("--date", "date_str", default="today", show_default=True, help="Due date (YYYY-MM-DD, DD/MM/YYYY, 'today')")
@click.pass_context
def add_tax(ctx, tax_type: str, amount: str, description: str, date_str: str):
    """Add a pending tax."""
    ledger = ctx.obj["ledger"]

    try:
        tax = ledger.add_tax(type=tax_type, date=date_str, amount=amount, description=description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added tax {tax.id}")
    click.echo(f"  Type: {tax.type.value}")
    click.echo(f"  Amount: {format_currency(tax.amount)}")


@tax_group.command("list")
@click.pass_context
def list_taxes(ctx):
    """List taxes, most recent first."""
    ledger = ctx.obj["ledger"]

    try:
        taxes = ledger.list_taxes()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not taxes:
        click.echo("No taxes found.")
        return

    for tax in taxes:
        status = f"paid {format_date(tax.paid_date)}" if tax.is_paid else "pending"
        click.echo(
            f"{tax.id:22s} | {format_date(tax.date):10s} | {tax.type.value:5s} | "
            f"{tax.description[:25]:25s} | {format_currency(tax.amount):>14s} | {status}"
        )


@tax_group.command("pay")
@click.argument("tax_id")
@click.pass_context
def pay_tax(ctx, tax_id: str):
    """Pay a tax from the principal bank."""
    ledger = ctx.obj["ledger"]

    try:
        tax = ledger.pay_tax(tax_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Paid tax '{tax.description}' ({format_currency(tax.amount)})")


@tax_group.command("delete")
@click.argument("tax_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_tax(ctx, tax_id: str, yes: bool):
    """Delete a tax. A paid tax is credited back to the principal bank."""
    ledger = ctx.obj["ledger"]

    if not yes and not click.confirm(f"Are you sure you want to delete tax {tax_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_tax(tax_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted tax {tax_id}")


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax_group, name="tax")

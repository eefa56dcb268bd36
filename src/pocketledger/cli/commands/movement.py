"""Movement commands."""

import click
from pocketledger.cli.bank_resolution import resolve_bank_or_exit
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.errors import DomainError
from pocketledger.utils.formatters import format_currency, format_date


@click.group()
def movement_group():
    """Record credits and debits against a bank."""
    pass


@movement_group.command("add")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--type", "movement_type", required=True, type=click.Choice(["credit", "debit"]), help="Direction of the movement")
@click.option("--amount", required=True, help="Amount (positive, e.g., 250,00)")
@click.option("--description", required=True, help="Movement description")
@click.option("--date", "date_str", default="today", show_default=True, help="Movement date (YYYY-MM-DD, DD/MM/YYYY, 'today')")
@click.pass_context
def add_movement(ctx, bank: str, movement_type: str, amount: str, description: str, date_str: str):
    """Add a movement and apply it to the bank balance.

    Examples:
        pocketledger movement add --bank Nubank --type credit --amount 3000 --description "Salário"
        pocketledger movement add --bank Nubank --type debit --amount 50 --description "Saque"
    """
    ledger = ctx.obj["ledger"]
    bank_id = resolve_bank_or_exit(ctx, ledger, bank)

    try:
        movement = ledger.add_movement(
            date=date_str,
            description=description,
            amount=amount,
            type=movement_type,
            bank_id=bank_id,
        )
        bank_obj = ledger.get_bank(bank_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added {movement.type.value} movement {movement.id}")
    click.echo(f"  Amount: {format_currency(movement.amount)}")
    click.echo(f"  Bank: {bank_obj.name} (balance {format_currency(bank_obj.balance)})")


@movement_group.command("list")
@click.pass_context
def list_movements(ctx):
    """List movements, most recent first."""
    ledger = ctx.obj["ledger"]

    try:
        views = ledger.list_movements()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not views:
        click.echo("No movements found.")
        return

    click.echo(f"\n{'ID':22s} | {'Date':10s} | {'Bank':16s} | {'Description':25s} | {'Amount':>15s}")
    click.echo("-" * 100)
    for view in views:
        movement = view.movement
        click.echo(
            f"{movement.id:22s} | {format_date(movement.date):10s} | {view.bank_name[:16]:16s} | "
            f"{movement.description[:25]:25s} | {format_currency(movement.balance_effect):>15s}"
        )


@movement_group.command("delete")
@click.argument("movement_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_movement(ctx, movement_id: str, yes: bool):
    """Delete a movement and reverse its effect on the bank balance."""
    ledger = ctx.obj["ledger"]

    if not yes and not click.confirm(f"Are you sure you want to delete movement {movement_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_movement(movement_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted movement {movement_id}")


def register_commands(cli):
    """Register movement commands with main CLI."""
    cli.add_command(movement_group, name="movement")

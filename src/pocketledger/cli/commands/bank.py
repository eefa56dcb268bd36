"""Bank management commands."""

import click
from pocketledger.cli.bank_resolution import resolve_bank_or_exit
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.errors import DomainError
from pocketledger.utils.formatters import format_currency


@click.group()
def bank_group():
    """Manage bank accounts."""
    pass


@bank_group.command("add")
@click.argument("name", metavar="BANK_NAME")
@click.argument("balance", metavar="BALANCE")
@click.option("--principal", is_flag=True, help="Use this bank to pay expenses and taxes")
@click.pass_context
def add_bank(ctx, name: str, balance: str, principal: bool):
    """Add a bank with its current balance.

    Marking a bank as principal removes the flag from every other bank.

    Examples:
        pocketledger bank add "Nubank" 1500,00 --principal
        pocketledger bank add "Itaú" "R$ 320,50"
    """
    ledger = ctx.obj["ledger"]

    try:
        bank = ledger.add_bank(name=name, initial_balance=balance, is_principal=principal)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added bank '{bank.name}' (ID: {bank.id})")
    click.echo(f"  Balance: {format_currency(bank.balance)}")
    if bank.is_principal:
        click.echo("  Principal account")


@bank_group.command("list")
@click.pass_context
def list_banks(ctx):
    """List all banks."""
    ledger = ctx.obj["ledger"]

    try:
        banks = ledger.list_banks()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not banks:
        click.echo("No banks found.")
        return

    click.echo("\nBanks:")
    click.echo("-" * 70)
    for bank in banks:
        marker = "*" if bank.is_principal else " "
        click.echo(f"{marker} {bank.id:22s} | {bank.name:20s} | {format_currency(bank.balance):>16s}")
    click.echo("\n* principal account")


@bank_group.command("delete")
@click.argument("bank", metavar="BANK")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bank(ctx, bank: str, yes: bool) -> None:
    """Delete a bank and all of its movements.

    BANK can be a bank name or ID.

    Examples:
        pocketledger bank delete "Nubank"
    """
    ledger = ctx.obj["ledger"]
    bank_id = resolve_bank_or_exit(ctx, ledger, bank)
    bank_obj = ledger.get_bank(bank_id)

    if not yes and not click.confirm(
        f"Delete bank '{bank_obj.name}' and all of its movements?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_bank(bank_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted bank '{bank_obj.name}'")


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")

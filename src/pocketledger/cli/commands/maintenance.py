"""Reset and self-test commands."""

import click
from pocketledger.domain.maintenance import clear_all_data, run_self_test


@click.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx, yes: bool):
    """Delete ALL ledger data. This cannot be undone."""
    store = ctx.obj["store"]

    if not yes and not click.confirm(
        "This deletes every bank, expense, movement, investment and tax. Continue?"
    ):
        click.echo("Reset cancelled.")
        return

    if clear_all_data(store):
        click.echo("All data cleared.")
    else:
        click.echo("Error: Could not clear data (see log for details)", err=True)
        ctx.exit(1)


@click.command("self-test")
@click.pass_context
def self_test(ctx):
    """Create and delete a throwaway bank and expense."""
    ledger = ctx.obj["ledger"]

    report = run_self_test(ledger)
    click.echo(f"Bank deletion:    {'ok' if report.bank_deleted else 'FAILED'}")
    click.echo(f"Expense deletion: {'ok' if report.expense_deleted else 'FAILED'}")
    if not report.passed:
        ctx.exit(1)


def register_commands(cli):
    """Register maintenance commands with main CLI."""
    cli.add_command(reset)
    cli.add_command(self_test)

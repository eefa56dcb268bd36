"""Summary command."""

import click
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.errors import DomainError
from pocketledger.domain.summary import build_ledger_summary, expenses_by_category
from pocketledger.utils.formatters import format_currency


def _line(label: str, amount) -> str:
    return f"  {label:<24s} {format_currency(amount):>16s}"


@click.command("summary")
@click.pass_context
def summary(ctx):
    """Show balances, pending obligations and spending suggestions."""
    ledger = ctx.obj["ledger"]

    try:
        banks = ledger.list_banks()
        expenses = ledger.list_expenses()
        taxes = ledger.list_taxes()
        investments = ledger.list_investments()
        totals = build_ledger_summary(banks, expenses, taxes, investments)
        suggestions = ledger.compute_suggestions(totals.available_balance)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nOverview")
    click.echo("-" * 44)
    click.echo(_line("Total balance", totals.total_balance))
    click.echo(_line("Principal balance", totals.principal_balance))
    click.echo(_line("Pending expenses", totals.pending_expenses))
    click.echo(_line("Pending taxes", totals.pending_taxes))
    click.echo(_line("Investments", totals.total_investments))
    click.echo(_line("Available balance", totals.available_balance))

    click.echo("\nSuggestions")
    click.echo("-" * 44)
    click.echo(_line("Daily spending", suggestions.daily_suggestion))
    click.echo(_line("Weekly spending", suggestions.weekly_suggestion))
    click.echo(_line("Emergency reserve", suggestions.emergency_reserve))
    click.echo(f"  {'Days left in month':<24s} {suggestions.remaining_days:>16d}")

    by_category = expenses_by_category(expenses)
    if by_category:
        click.echo("\nExpenses by category")
        click.echo("-" * 44)
        for category, total in sorted(by_category.items(), key=lambda item: -item[1]):
            click.echo(_line(category, total))


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)

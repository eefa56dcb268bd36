"""Expense management commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.entities import ExpenseCategory
from pocketledger.domain.errors import DomainError
from pocketledger.domain.summary import pending_total
from pocketledger.utils.formatters import format_currency, format_date

CATEGORY_CHOICES = [c.value for c in ExpenseCategory]


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Expense date (YYYY-MM-DD, DD/MM/YYYY, 'today')")
@click.option("--description", required=True, help="What the expense is for")
@click.option("--category", required=True, help=f"One of: {', '.join(CATEGORY_CHOICES)}")
@click.option("--amount", required=True, help="Amount (e.g., 120,50)")
@click.pass_context
def add_expense(ctx, date_str: str, description: str, category: str, amount: str):
    """Add an unpaid expense.

    Examples:
        pocketledger expense add --description "Conta de luz" --category Luz --amount 180,40
    """
    ledger = ctx.obj["ledger"]

    try:
        expense = ledger.add_expense(date=date_str, description=description, category=category, amount=amount)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added expense {expense.id}")
    click.echo(f"  Date: {format_date(expense.date)}")
    click.echo(f"  Description: {expense.description}")
    click.echo(f"  Category: {expense.category.value}")
    click.echo(f"  Amount: {format_currency(expense.amount)}")


@expense_group.command("list")
@click.option("--year", type=int, help="Only expenses from this year")
@click.option("--month", type=click.IntRange(1, 12), help="Only expenses from this month (requires --year)")
@click.pass_context
def list_expenses(ctx, year: int | None, month: int | None):
    """List expenses, most recent first."""
    ledger = ctx.obj["ledger"]

    if month is not None and year is None:
        click.echo("Error: --month requires --year", err=True)
        ctx.exit(1)

    try:
        if year is not None:
            expenses = ledger.list_expenses_by_period(year, month)
        else:
            expenses = ledger.list_expenses()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\n{'ID':22s} | {'Date':10s} | {'Category':10s} | {'Description':25s} | {'Amount':>14s} | Status")
    click.echo("-" * 105)
    for expense in expenses:
        status = f"paid {format_date(expense.paid_date)}" if expense.is_paid else "pending"
        click.echo(
            f"{expense.id:22s} | {format_date(expense.date):10s} | {expense.category.value:10s} | "
            f"{expense.description[:25]:25s} | {format_currency(expense.amount):>14s} | {status}"
        )
    click.echo(f"\nPending: {format_currency(pending_total(expenses))}")


@expense_group.command("pay")
@click.argument("expense_id")
@click.pass_context
def pay_expense(ctx, expense_id: str):
    """Pay an expense from the principal bank."""
    ledger = ctx.obj["ledger"]

    try:
        expense = ledger.pay_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Paid expense '{expense.description}' ({format_currency(expense.amount)})")


@expense_group.command("revert")
@click.argument("expense_id")
@click.pass_context
def revert_expense(ctx, expense_id: str):
    """Undo an expense payment, returning the money to the principal bank."""
    ledger = ctx.obj["ledger"]

    try:
        expense = ledger.revert_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Reverted payment of '{expense.description}' ({format_currency(expense.amount)})")


@expense_group.command("delete")
@click.argument("expense_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: str, yes: bool):
    """Delete an expense. A paid expense is reverted first."""
    ledger = ctx.obj["ledger"]

    if not yes and not click.confirm(f"Are you sure you want to delete expense {expense_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")

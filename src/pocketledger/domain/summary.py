"""Aggregate totals computed from listed collections."""

from decimal import Decimal
from typing import Sequence

from pocketledger.domain.entities import Bank, Expense, Investment, LedgerSummary, Tax


def build_ledger_summary(
    banks: Sequence[Bank],
    expenses: Sequence[Expense],
    taxes: Sequence[Tax],
    investments: Sequence[Investment],
) -> LedgerSummary:
    """Build overview totals.

    The available balance is the total bank balance minus every pending
    expense and pending tax. Investments are reported but never counted as
    available money.

    Args:
        banks: All banks
        expenses: All expenses
        taxes: All taxes
        investments: All investments

    Returns:
        LedgerSummary with the six overview figures
    """
    total_balance = sum((bank.balance for bank in banks), Decimal("0"))
    principal_balance = sum(
        (bank.balance for bank in banks if bank.is_principal), Decimal("0")
    )
    pending_expenses = sum(
        (expense.amount for expense in expenses if not expense.is_paid), Decimal("0")
    )
    pending_taxes = sum((tax.amount for tax in taxes if not tax.is_paid), Decimal("0"))
    total_investments = sum((inv.signed_amount for inv in investments), Decimal("0"))

    return LedgerSummary(
        total_balance=total_balance,
        principal_balance=principal_balance,
        pending_expenses=pending_expenses,
        pending_taxes=pending_taxes,
        total_investments=total_investments,
        available_balance=total_balance - pending_expenses - pending_taxes,
    )


def expenses_by_category(expenses: Sequence[Expense]) -> dict[str, Decimal]:
    """Total expense amount per category, paid or not, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        key = expense.category.value
        totals[key] = totals.get(key, Decimal("0")) + expense.amount
    return totals


def investments_by_category(investments: Sequence[Investment]) -> dict[str, Decimal]:
    """Net investment value per category (deposits minus withdrawals)."""
    totals: dict[str, Decimal] = {}
    for investment in investments:
        key = investment.category.value
        totals[key] = totals.get(key, Decimal("0")) + investment.signed_amount
    return totals


def pending_total(expenses: Sequence[Expense]) -> Decimal:
    """Sum of unpaid expense amounts."""
    return sum((e.amount for e in expenses if not e.is_paid), Decimal("0"))

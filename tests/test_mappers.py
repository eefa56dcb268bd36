"""Tests for mapper functions between stored records and entities."""

from datetime import date
from decimal import Decimal
import pytest

from pocketledger.domain import entities as domain
from pocketledger.domain.errors import StorageError
from pocketledger.storage import mappers


def test_bank_record_layout():
    """Test banks are stored with camelCase keys and string amounts."""
    bank = domain.Bank(id="b1", name="Nubank", balance=Decimal("12.30"), is_principal=True)
    assert mappers.bank_to_record(bank) == {
        "id": "b1",
        "name": "Nubank",
        "balance": "12.30",
        "isPrincipal": True,
    }


def test_bank_to_domain_numeric_balance():
    """Test balances written as JSON numbers are accepted."""
    bank = mappers.bank_to_domain({"id": "b1", "name": "Old", "balance": 99.9})
    assert bank.balance == Decimal("99.9")
    assert bank.is_principal is False


@pytest.mark.parametrize("balance", [None, "abc", True, "NaN", "Infinity", "-Infinity", float("nan")])
def test_bank_to_domain_invalid_balance(balance):
    with pytest.raises(StorageError):
        mappers.bank_to_domain({"id": "b1", "name": "Bad", "balance": balance})


@pytest.mark.parametrize("flag", ["false", "true", 0, 1])
def test_bank_to_domain_rejects_non_boolean_principal(flag):
    """Test only real booleans mark a stored bank as principal."""
    with pytest.raises(StorageError):
        mappers.bank_to_domain({"id": "b1", "name": "Old", "balance": "1", "isPrincipal": flag})


def test_bank_to_domain_null_principal_is_false():
    bank = mappers.bank_to_domain({"id": "b1", "name": "Old", "balance": "1", "isPrincipal": None})
    assert bank.is_principal is False


def test_expense_to_domain_rejects_non_boolean_paid_flag():
    with pytest.raises(StorageError):
        mappers.expense_to_domain({
            "id": "e1", "date": "2026-09-10", "description": "x", "category": "Outros", "amount": "1", "isPaid": "no",
        })


def test_expense_to_record_unpaid_has_no_paid_date():
    expense = domain.Expense(
        id="e1",
        date=date(2026, 9, 10),
        description="Light",
        category=domain.ExpenseCategory.ELECTRICITY,
        amount=Decimal("200"),
    )
    record = mappers.expense_to_record(expense)
    assert record == {
        "id": "e1",
        "date": "2026-09-10",
        "description": "Light",
        "category": "Luz",
        "amount": "200",
        "isPaid": False,
    }


def test_expense_paid_round_trip():
    expense = domain.Expense(
        id="e1",
        date=date(2026, 9, 10),
        description="Card",
        category=domain.ExpenseCategory.CREDIT_CARD,
        amount=Decimal("75.25"),
        is_paid=True,
        paid_date=date(2026, 9, 21),
    )
    record = mappers.expense_to_record(expense)
    assert record["paidDate"] == "2026-09-21"
    assert mappers.expense_to_domain(record) == expense


def test_expense_paid_without_paid_date_uses_own_date():
    expense = mappers.expense_to_domain({
        "id": "e1", "date": "2026-09-10", "description": "x", "category": "Outros", "amount": "1", "isPaid": True,
    })
    assert expense.paid_date == date(2026, 9, 10)


def test_expense_unpaid_drops_stray_paid_date():
    expense = mappers.expense_to_domain({
        "id": "e1", "date": "2026-09-10", "description": "x", "category": "Outros", "amount": "1",
        "isPaid": False, "paidDate": "2026-09-11",
    })
    assert expense.paid_date is None


def test_expense_accepts_timestamps():
    expense = mappers.expense_to_domain({
        "id": "e1", "date": "2026-09-10T14:30:00.000Z", "description": "x", "category": "Viagem", "amount": "1",
    })
    assert expense.date == date(2026, 9, 10)
    assert expense.category == domain.ExpenseCategory.TRAVEL


@pytest.mark.parametrize(
    "override",
    [{"category": "Unknown"}, {"date": "yesterday-ish"}, {"date": None}, {"amount": "NaN-ish"}],
)
def test_expense_to_domain_malformed(override):
    record = {"id": "e1", "date": "2026-09-10", "description": "x", "category": "Outros", "amount": "1"}
    record.update(override)
    with pytest.raises(StorageError):
        mappers.expense_to_domain(record)


def test_movement_ignores_bank_name():
    movement = mappers.movement_to_domain({
        "id": "m1", "date": "2026-09-01", "description": "Pix", "amount": "5", "type": "debit",
        "bankId": "b1", "bankName": "Old name",
    })
    assert movement.type == domain.MovementType.DEBIT
    assert "bankName" not in mappers.movement_to_record(movement)


def test_movement_requires_bank_id():
    with pytest.raises(StorageError):
        mappers.movement_to_domain({"id": "m1", "date": "2026-09-01", "amount": "5", "type": "credit"})


def test_investment_round_trip():
    investment = domain.Investment(
        id="i1",
        date=date(2026, 9, 1),
        description="Consórcio",
        amount=Decimal("120"),
        type=domain.InvestmentType.WITHDRAWAL,
        category=domain.InvestmentCategory.CONSORTIUM,
    )
    record = mappers.investment_to_record(investment)
    assert record["category"] == "Consórcio"
    assert record["type"] == "withdrawal"
    assert mappers.investment_to_domain(record) == investment


def test_tax_defaults_to_pending():
    tax = mappers.tax_to_domain({"id": "t1", "type": "IPVA", "date": "2026-01-15", "amount": "900", "description": "Car"})
    assert tax.status == domain.TaxStatus.PENDING
    assert tax.paid_date is None


def test_tax_paid_record():
    tax = mappers.tax_to_domain({
        "id": "t1", "type": "Outro", "date": "2026-01-15", "amount": "9", "description": "Fee", "status": "paid",
    })
    assert tax.is_paid
    assert tax.paid_date == date(2026, 1, 15)
    assert mappers.tax_to_record(tax)["paidDate"] == "2026-01-15"


def test_tax_invalid_status():
    with pytest.raises(StorageError):
        mappers.tax_to_domain({
            "id": "t1", "type": "DAS", "date": "2026-01-15", "amount": "9", "description": "x", "status": "late",
        })

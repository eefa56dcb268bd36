"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal
import pytest

from pocketledger.domain.entities import (
    Bank,
    ExpenseCategory,
    Investment,
    InvestmentCategory,
    InvestmentType,
    Movement,
    MovementType,
    MovementView,
    SelfTestReport,
    Tax,
    TaxStatus,
    TaxType,
)


def test_bank_creation():
    """Test creating a Bank entity."""
    bank = Bank(id="b1", name="Nubank", balance=Decimal("10"))
    assert bank.name == "Nubank"
    assert bank.is_principal is False


def test_entities_are_immutable():
    bank = Bank(id="b1", name="Nubank", balance=Decimal("10"))
    with pytest.raises(FrozenInstanceError):
        bank.balance = Decimal("0")


def test_expense_category_values():
    """Test the stored category labels."""
    assert [c.value for c in ExpenseCategory] == [
        "Luz", "Água", "Internet", "Aluguel", "Mercado", "Presente", "Viagem", "C.Crédito", "Outros",
    ]
    assert [c.value for c in InvestmentCategory] == ["CDI", "CDB", "Tesouro", "Consórcio"]
    assert [t.value for t in TaxType] == ["DAS", "IR", "IPVA", "IPTU", "Outro"]


@pytest.mark.parametrize("movement_type, effect", [(MovementType.CREDIT, "25"), (MovementType.DEBIT, "-25")])
def test_movement_balance_effect(movement_type, effect):
    movement = Movement(
        id="m1", date=date(2026, 9, 1), description="x", amount=Decimal("25"), type=movement_type, bank_id="b1"
    )
    assert movement.balance_effect == Decimal(effect)
    view = MovementView(movement=movement, bank_name="Nubank")
    assert view.id == "m1"


def test_investment_signed_amount():
    deposit = Investment(
        id="i1", date=date(2026, 9, 1), description="x", amount=Decimal("5"),
        type=InvestmentType.DEPOSIT, category=InvestmentCategory.CDI,
    )
    assert deposit.signed_amount == Decimal("5")


def test_tax_is_paid():
    tax = Tax(id="t1", type=TaxType.IR, date=date(2026, 4, 30), amount=Decimal("1"), description="IR")
    assert tax.status == TaxStatus.PENDING
    assert tax.is_paid is False


def test_self_test_report_passed():
    assert SelfTestReport(bank_deleted=True, expense_deleted=True).passed is True
    assert SelfTestReport(bank_deleted=True, expense_deleted=False).passed is False

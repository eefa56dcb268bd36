"""Tests for tax operations of the ledger service."""

from decimal import Decimal
import pytest

from conftest import FIXED_TODAY
from pocketledger.domain.entities import TaxStatus, TaxType
from pocketledger.domain.errors import (
    InsufficientFundsError,
    InvalidStateError,
    NoPrincipalAccountError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def sample_tax(ledger):
    """Create a pending DAS tax of 150."""
    return ledger.add_tax(type="DAS", date="2026-09-20", amount="150", description="Simples Nacional")


def test_add_tax_is_pending(sample_tax):
    assert sample_tax.type == TaxType.DAS
    assert sample_tax.status == TaxStatus.PENDING
    assert sample_tax.is_paid is False
    assert sample_tax.paid_date is None


@pytest.mark.parametrize("kwargs", [{"amount": "0"}, {"type": "VAT"}, {"description": ""}, {"date": "31/02/2026"}])
def test_add_tax_invalid(ledger, kwargs):
    fields = {"type": "IPVA", "date": "2026-09-20", "amount": "150", "description": "Car"}
    fields.update(kwargs)
    with pytest.raises(ValidationError):
        ledger.add_tax(**fields)
    assert ledger.list_taxes() == []


def test_pay_tax(ledger, principal_bank, sample_tax):
    """Test paying a tax debits the principal bank."""
    paid = ledger.pay_tax(sample_tax.id)

    assert paid.status == TaxStatus.PAID
    assert paid.paid_date == FIXED_TODAY
    assert ledger.get_tax(sample_tax.id) == paid
    assert ledger.get_bank(principal_bank.id).balance == Decimal("350")


def test_pay_tax_twice(ledger, principal_bank, sample_tax):
    ledger.pay_tax(sample_tax.id)
    with pytest.raises(InvalidStateError):
        ledger.pay_tax(sample_tax.id)
    assert ledger.get_bank(principal_bank.id).balance == Decimal("350")


def test_pay_tax_not_found(ledger, principal_bank):
    with pytest.raises(NotFoundError):
        ledger.pay_tax("missing")


def test_pay_tax_without_principal(ledger, sample_tax):
    """Test paying with no principal bank leaves the tax pending."""
    with pytest.raises(NoPrincipalAccountError):
        ledger.pay_tax(sample_tax.id)
    assert ledger.get_tax(sample_tax.id).status == TaxStatus.PENDING


def test_pay_tax_insufficient_funds(ledger):
    bank = ledger.add_bank(name="Thin", initial_balance="100", is_principal=True)
    tax = ledger.add_tax(type="IPTU", date="2026-09-20", amount="100.01", description="House")

    with pytest.raises(InsufficientFundsError):
        ledger.pay_tax(tax.id)

    assert ledger.get_tax(tax.id).status == TaxStatus.PENDING
    assert ledger.get_bank(bank.id).balance == Decimal("100")


def test_delete_pending_tax(ledger, principal_bank, sample_tax):
    ledger.delete_tax(sample_tax.id)
    assert ledger.list_taxes() == []
    assert ledger.get_bank(principal_bank.id).balance == Decimal("500")


def test_delete_paid_tax_credits_principal(ledger, principal_bank, sample_tax):
    """Test deleting a paid tax returns its amount to the principal bank."""
    ledger.pay_tax(sample_tax.id)
    ledger.delete_tax(sample_tax.id)

    assert ledger.get_tax(sample_tax.id) is None
    assert ledger.get_bank(principal_bank.id).balance == Decimal("500")


def test_delete_paid_tax_without_principal(ledger, principal_bank, sample_tax):
    """Test a paid tax cannot be deleted once no bank is principal."""
    ledger.pay_tax(sample_tax.id)
    ledger.delete_bank(principal_bank.id)

    with pytest.raises(NoPrincipalAccountError):
        ledger.delete_tax(sample_tax.id)
    assert ledger.get_tax(sample_tax.id).status == TaxStatus.PAID


def test_delete_tax_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.delete_tax("missing")


def test_list_taxes_most_recent_first(ledger):
    older = ledger.add_tax(type="IR", date="2026-04-30", amount="10", description="Annual")
    newer = ledger.add_tax(type="Outro", date="2026-09-01", amount="10", description="Fee")
    assert [t.id for t in ledger.list_taxes()] == [newer.id, older.id]

"""Mapper functions to convert between domain entities and stored records.

Stored records are the JSON objects kept under each collection key. Field
names on disk use camelCase so records exported by earlier versions of the
app stay readable. This layer isolates that conversion and
coerces loosely typed values (numbers stored as floats or strings, dates
with a time part) into domain types.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pocketledger.domain import entities as domain
from pocketledger.domain.errors import StorageError

Record = dict[str, Any]


def _require(record: Record, field: str) -> Any:
    value = record.get(field)
    if value is None:
        raise StorageError(f"Stored record {record.get('id')!r} is missing '{field}'")
    return value


def _to_decimal(record: Record, field: str) -> Decimal:
    value = _require(record, field)
    if isinstance(value, bool):
        raise StorageError(f"Stored record {record.get('id')!r} has invalid '{field}': {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite():
        raise StorageError(f"Stored record {record.get('id')!r} has invalid '{field}': {value!r}")
    return amount


def _to_bool(record: Record, field: str) -> bool:
    value = record.get(field, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise StorageError(f"Stored record {record.get('id')!r} has invalid '{field}': {value!r}")
    return value


def _to_date(record: Record, field: str, required: bool = True) -> Optional[date]:
    value = record.get(field)
    if value is None or value == "":
        if required:
            raise StorageError(f"Stored record {record.get('id')!r} is missing '{field}'")
        return None
    try:
        # Accept full ISO timestamps as well as plain dates
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise StorageError(f"Stored record {record.get('id')!r} has invalid '{field}': {value!r}")


def _to_enum(record: Record, field: str, enum_cls):
    value = _require(record, field)
    try:
        return enum_cls(value)
    except ValueError:
        raise StorageError(f"Stored record {record.get('id')!r} has invalid '{field}': {value!r}")


def _amount_to_json(amount: Decimal) -> str:
    return str(amount)


def bank_to_domain(record: Record) -> domain.Bank:
    """Convert a stored bank record to a Bank entity."""
    return domain.Bank(
        id=str(_require(record, "id")),
        name=str(record.get("name") or ""),
        balance=_to_decimal(record, "balance"),
        is_principal=_to_bool(record, "isPrincipal"),
    )


def bank_to_record(bank: domain.Bank) -> Record:
    """Convert a Bank entity to a stored record."""
    return {
        "id": bank.id,
        "name": bank.name,
        "balance": _amount_to_json(bank.balance),
        "isPrincipal": bank.is_principal,
    }


def expense_to_domain(record: Record) -> domain.Expense:
    """Convert a stored expense record to an Expense entity.

    A record flagged paid without a paid date gets its own date as paid
    date; an unpaid record never keeps a paid date.
    """
    expense_date = _to_date(record, "date")
    is_paid = _to_bool(record, "isPaid")
    paid_date = _to_date(record, "paidDate", required=False) if is_paid else None
    if is_paid and paid_date is None:
        paid_date = expense_date
    return domain.Expense(
        id=str(_require(record, "id")),
        date=expense_date,
        description=str(record.get("description") or ""),
        category=_to_enum(record, "category", domain.ExpenseCategory),
        amount=_to_decimal(record, "amount"),
        is_paid=is_paid,
        paid_date=paid_date,
    )


def expense_to_record(expense: domain.Expense) -> Record:
    """Convert an Expense entity to a stored record."""
    record = {
        "id": expense.id,
        "date": expense.date.isoformat(),
        "description": expense.description,
        "category": expense.category.value,
        "amount": _amount_to_json(expense.amount),
        "isPaid": expense.is_paid,
    }
    if expense.is_paid and expense.paid_date is not None:
        record["paidDate"] = expense.paid_date.isoformat()
    return record


def movement_to_domain(record: Record) -> domain.Movement:
    """Convert a stored movement record to a Movement entity.

    Any stored ``bankName`` is ignored; names are joined at read time.
    """
    return domain.Movement(
        id=str(_require(record, "id")),
        date=_to_date(record, "date"),
        description=str(record.get("description") or ""),
        amount=_to_decimal(record, "amount"),
        type=_to_enum(record, "type", domain.MovementType),
        bank_id=str(_require(record, "bankId")),
    )


def movement_to_record(movement: domain.Movement) -> Record:
    """Convert a Movement entity to a stored record."""
    return {
        "id": movement.id,
        "date": movement.date.isoformat(),
        "description": movement.description,
        "amount": _amount_to_json(movement.amount),
        "type": movement.type.value,
        "bankId": movement.bank_id,
    }


def investment_to_domain(record: Record) -> domain.Investment:
    """Convert a stored investment record to an Investment entity."""
    return domain.Investment(
        id=str(_require(record, "id")),
        date=_to_date(record, "date"),
        description=str(record.get("description") or ""),
        amount=_to_decimal(record, "amount"),
        type=_to_enum(record, "type", domain.InvestmentType),
        category=_to_enum(record, "category", domain.InvestmentCategory),
    )


def investment_to_record(investment: domain.Investment) -> Record:
    """Convert an Investment entity to a stored record."""
    return {
        "id": investment.id,
        "date": investment.date.isoformat(),
        "description": investment.description,
        "amount": _amount_to_json(investment.amount),
        "type": investment.type.value,
        "category": investment.category.value,
    }


def tax_to_domain(record: Record) -> domain.Tax:
    """Convert a stored tax record to a Tax entity."""
    tax_date = _to_date(record, "date")
    status = _to_enum({**record, "status": record.get("status") or "pending"}, "status", domain.TaxStatus)
    paid_date = None
    if status == domain.TaxStatus.PAID:
        paid_date = _to_date(record, "paidDate", required=False) or tax_date
    return domain.Tax(
        id=str(_require(record, "id")),
        type=_to_enum(record, "type", domain.TaxType),
        date=tax_date,
        amount=_to_decimal(record, "amount"),
        description=str(record.get("description") or ""),
        status=status,
        paid_date=paid_date,
    )


def tax_to_record(tax: domain.Tax) -> Record:
    """Convert a Tax entity to a stored record."""
    record = {
        "id": tax.id,
        "type": tax.type.value,
        "date": tax.date.isoformat(),
        "amount": _amount_to_json(tax.amount),
        "description": tax.description,
        "status": tax.status.value,
    }
    if tax.is_paid and tax.paid_date is not None:
        record["paidDate"] = tax.paid_date.isoformat()
    return record

"""Ledger domain service.

The ledger owns the five stored collections (banks, expenses, movements,
investments and taxes) and keeps them consistent with each other:

- paying an expense or a tax debits the principal bank, reverting or
  deleting a paid one credits it back;
- adding a movement adjusts its bank, deleting it reverses the adjustment;
- deleting a bank removes every movement that references it;
- at most one bank is principal.

Every operation re-reads the collections it touches from the store,
validates, and writes the whole collections back. Writes that belong
together go through ``KeyValueStore.set_many``.
"""

import logging
import threading
import time
import uuid
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from pocketledger.domain import errors
from pocketledger.domain.entities import (
    Bank,
    Expense,
    ExpenseCategory,
    Investment,
    InvestmentCategory,
    InvestmentType,
    Movement,
    MovementType,
    MovementView,
    Suggestions,
    Tax,
    TaxStatus,
    TaxType,
)
from pocketledger.domain.errors import (
    InsufficientFundsError,
    InvalidStateError,
    NoPrincipalAccountError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from pocketledger.domain.suggestions import compute_suggestions
from pocketledger.storage import mappers
from pocketledger.storage.base import (
    BANKS_KEY,
    EXPENSES_KEY,
    INVESTMENTS_KEY,
    MOVEMENTS_KEY,
    TAXES_KEY,
    KeyValueStore,
)
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

BANK_NOT_FOUND_LABEL = "Bank not found"

_MAPPERS = {
    BANKS_KEY: (mappers.bank_to_domain, mappers.bank_to_record),
    EXPENSES_KEY: (mappers.expense_to_domain, mappers.expense_to_record),
    MOVEMENTS_KEY: (mappers.movement_to_domain, mappers.movement_to_record),
    INVESTMENTS_KEY: (mappers.investment_to_domain, mappers.investment_to_record),
    TAXES_KEY: (mappers.tax_to_domain, mappers.tax_to_record),
}


def generate_id() -> str:
    """Return a new record identifier (millisecond timestamp plus random suffix)."""
    return f"{int(time.time() * 1000)}{uuid.uuid4().hex[:9]}"


def _by_date_desc(records: list) -> list:
    return sorted(records, key=lambda record: record.date, reverse=True)


class LedgerService:
    """Service owning every read and write of the ledger collections."""

    def __init__(
        self,
        store: KeyValueStore,
        today: Optional[Callable[[], date]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """Initialize ledger service.

        Args:
            store: Key-value store holding the collections
            today: Clock used for paid dates and suggestions (defaults to date.today)
            id_factory: Generator for new record identifiers
        """
        self.store = store
        self._today = today or date.today
        self._new_id = id_factory or generate_id
        # Mutations hold this for their whole read-modify-write cycle.
        # Reentrant because deleting a paid expense reverts it first.
        self._lock = threading.RLock()

    def today(self) -> date:
        """Current date according to the service clock."""
        return self._today()

    # Collection access
    def _load(self, key: str) -> list:
        """Load a collection, assigning ids to records stored without one."""
        to_domain, to_record = _MAPPERS[key]
        raw = self.store.get(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(f"Stored value for '{key}' is not a list")

        records = []
        repaired = 0
        for item in raw:
            if not isinstance(item, dict):
                raise StorageError(f"Stored value for '{key}' contains a non-record item: {item!r}")
            if not item.get("id"):
                item = {**item, "id": self._new_id()}
                repaired += 1
            records.append(item)

        entities = [to_domain(record) for record in records]
        if repaired:
            logger.warning("Assigned ids to %d stored %s without one", repaired, key)
            self.store.set(key, [to_record(entity) for entity in entities])
        return entities

    def _dump(self, key: str, entities: list) -> list[dict[str, Any]]:
        _, to_record = _MAPPERS[key]
        return [to_record(entity) for entity in entities]

    def _save(self, key: str, entities: list) -> None:
        self.store.set(key, self._dump(key, entities))

    def _save_many(self, collections: dict[str, list]) -> None:
        self.store.set_many({key: self._dump(key, entities) for key, entities in collections.items()})

    # Input coercion
    @staticmethod
    def _coerce_text(value: Optional[str], field: str) -> str:
        if value is None or not str(value).strip():
            raise ValidationError(errors.must_not_be_blank(field))
        return str(value).strip()

    @staticmethod
    def _coerce_amount(value: Any, field: str, positive: bool = True) -> Decimal:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(errors.must_not_be_blank(field))
        if isinstance(value, bool):
            raise ValidationError(f"Invalid {field.lower()}: {value!r}")
        try:
            if isinstance(value, str):
                amount = parse_amount(value)
            else:
                amount = Decimal(str(value))
        except (ValueError, InvalidOperation) as e:
            raise ValidationError(f"Invalid {field.lower()}: {e}")
        if not amount.is_finite():
            raise ValidationError(f"Invalid {field.lower()}: {value!r}")
        if positive and amount <= 0:
            raise ValidationError(errors.must_be_positive(field))
        return amount

    def _coerce_date(self, value: Any, field: str = "Date") -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if value is None or not str(value).strip():
            raise ValidationError(errors.must_not_be_blank(field))
        try:
            # Relative words follow the service clock
            return parse_date(str(value), today=self._today())
        except ValueError as e:
            raise ValidationError(f"Invalid {field.lower()}: {e}")

    @staticmethod
    def _coerce_choice(value: Any, enum_cls, field: str):
        """Accept an enum member, its stored value or its name (case-insensitive)."""
        if isinstance(value, enum_cls):
            return value
        text = str(value or "").strip()
        for member in enum_cls:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValidationError(errors.invalid_choice(field, value, [m.value for m in enum_cls]))

    @staticmethod
    def _find(records: list, record_id: str):
        for record in records:
            if record.id == record_id:
                return record
        return None

    @staticmethod
    def _replace_in(records: list, updated) -> list:
        return [updated if record.id == updated.id else record for record in records]

    @staticmethod
    def _require_principal(banks: list[Bank]) -> Bank:
        for bank in banks:
            if bank.is_principal:
                return bank
        raise NoPrincipalAccountError(errors.no_principal_account())

    # Bank operations
    def list_banks(self) -> list[Bank]:
        """List all banks in insertion order.

        Returns:
            List of bank entities, each with a non-empty id
        """
        return self._load(BANKS_KEY)

    def get_bank(self, bank_id: str) -> Optional[Bank]:
        """Get bank by ID, or None if not found."""
        return self._find(self.list_banks(), bank_id)

    def get_principal_bank(self) -> Optional[Bank]:
        """Get the bank flagged as principal, or None."""
        for bank in self.list_banks():
            if bank.is_principal:
                return bank
        return None

    def add_bank(self, name: str, initial_balance: Any, is_principal: bool = False) -> Bank:
        """Create a new bank.

        Args:
            name: Bank name
            initial_balance: Starting balance (may be negative)
            is_principal: If True, this bank becomes the only principal bank

        Returns:
            The created bank

        Raises:
            ValidationError: If name is blank or balance is missing/unparseable
        """
        name = self._coerce_text(name, "Bank name")
        balance = self._coerce_amount(initial_balance, "Balance", positive=False)

        with self._lock:
            banks = self.list_banks()
            if is_principal:
                banks = [replace(bank, is_principal=False) for bank in banks]

            bank = Bank(id=self._new_id(), name=name, balance=balance, is_principal=bool(is_principal))
            banks.append(bank)
            self._save(BANKS_KEY, banks)

        logger.info("Added bank %s (%s), principal=%s", bank.id, bank.name, bank.is_principal)
        return bank

    def delete_bank(self, bank_id: str) -> None:
        """Delete a bank and every movement that references it.

        Other banks' balances are left untouched since a movement only ever
        affects its own bank.

        Raises:
            NotFoundError: If bank not found
        """
        with self._lock:
            banks = self.list_banks()
            bank = self._find(banks, bank_id)
            if bank is None:
                raise NotFoundError(errors.record_not_found("Bank", bank_id))

            movements = self._load(MOVEMENTS_KEY)
            remaining = [m for m in movements if m.bank_id != bank_id]
            self._save_many({
                BANKS_KEY: [b for b in banks if b.id != bank_id],
                MOVEMENTS_KEY: remaining,
            })

        logger.info(
            "Deleted bank %s (%s) and %d movement(s)",
            bank_id,
            bank.name,
            len(movements) - len(remaining),
        )

    def adjust_bank_balance(self, bank_id: str, delta: Any) -> bool:
        """Add a signed delta to a bank's balance.

        Returns:
            False (and writes nothing) if the bank does not exist
        """
        delta = self._coerce_amount(delta, "Delta", positive=False)
        with self._lock:
            banks = self.list_banks()
            bank = self._find(banks, bank_id)
            if bank is None:
                logger.debug("Balance adjustment skipped, bank %s not found", bank_id)
                return False
            self._save(BANKS_KEY, self._replace_in(banks, replace(bank, balance=bank.balance + delta)))
            return True

    # Expense operations
    def list_expenses(self) -> list[Expense]:
        """List all expenses, most recent first."""
        return _by_date_desc(self._load(EXPENSES_KEY))

    def list_expenses_by_period(self, year: int, month: Optional[int] = None) -> list[Expense]:
        """List expenses dated in a year, or in one month of that year.

        Args:
            year: Calendar year
            month: Optional month number (1-12)

        Raises:
            ValidationError: If month is outside 1-12
        """
        if month is not None and not 1 <= month <= 12:
            raise ValidationError(f"Invalid month: {month}")
        return [
            expense
            for expense in self.list_expenses()
            if expense.date.year == year and (month is None or expense.date.month == month)
        ]

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get expense by ID, or None if not found."""
        return self._find(self._load(EXPENSES_KEY), expense_id)

    def add_expense(self, date: Any, description: str, category: Any, amount: Any) -> Expense:
        """Create a new unpaid expense.

        Raises:
            ValidationError: If amount is not positive or a field is blank/invalid
        """
        expense = Expense(
            id=self._new_id(),
            date=self._coerce_date(date),
            description=self._coerce_text(description, "Description"),
            category=self._coerce_choice(category, ExpenseCategory, "category"),
            amount=self._coerce_amount(amount, "Amount"),
        )
        with self._lock:
            expenses = self._load(EXPENSES_KEY)
            expenses.append(expense)
            self._save(EXPENSES_KEY, expenses)

        logger.info("Added expense %s (%s, %s)", expense.id, expense.description, expense.amount)
        return expense

    def pay_expense(self, expense_id: str) -> Expense:
        """Pay an expense from the principal bank.

        Returns:
            The paid expense

        Raises:
            NotFoundError: If expense not found
            InvalidStateError: If expense is already paid
            NoPrincipalAccountError: If no bank is principal
            InsufficientFundsError: If the principal balance is below the amount
        """
        with self._lock:
            expenses = self._load(EXPENSES_KEY)
            banks = self.list_banks()

            expense = self._find(expenses, expense_id)
            if expense is None:
                raise NotFoundError(errors.record_not_found("Expense", expense_id))
            if expense.is_paid:
                raise InvalidStateError(errors.already_paid("Expense", expense_id))

            principal = self._require_principal(banks)
            if principal.balance < expense.amount:
                raise InsufficientFundsError(
                    errors.insufficient_funds(principal.name, principal.balance, expense.amount)
                )

            paid = replace(expense, is_paid=True, paid_date=self._today())
            debited = replace(principal, balance=principal.balance - expense.amount)
            self._save_many({
                EXPENSES_KEY: self._replace_in(expenses, paid),
                BANKS_KEY: self._replace_in(banks, debited),
            })

        logger.info("Paid expense %s from bank %s", expense_id, principal.id)
        return paid

    def revert_expense(self, expense_id: str) -> Expense:
        """Undo an expense payment, crediting the principal bank back.

        Returns:
            The expense, unpaid again

        Raises:
            NotFoundError: If expense not found
            InvalidStateError: If expense is not paid
            NoPrincipalAccountError: If no bank is principal
        """
        with self._lock:
            expenses = self._load(EXPENSES_KEY)
            banks = self.list_banks()

            expense = self._find(expenses, expense_id)
            if expense is None:
                raise NotFoundError(errors.record_not_found("Expense", expense_id))
            if not expense.is_paid:
                raise InvalidStateError(errors.not_paid("Expense", expense_id))

            principal = self._require_principal(banks)

            unpaid = replace(expense, is_paid=False, paid_date=None)
            credited = replace(principal, balance=principal.balance + expense.amount)
            self._save_many({
                EXPENSES_KEY: self._replace_in(expenses, unpaid),
                BANKS_KEY: self._replace_in(banks, credited),
            })

        logger.info("Reverted expense %s to bank %s", expense_id, principal.id)
        return unpaid

    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense, reverting its payment first if it was paid.

        Raises:
            NotFoundError: If expense not found
            NoPrincipalAccountError: If the expense is paid and no bank is principal
        """
        with self._lock:
            expense = self.get_expense(expense_id)
            if expense is None:
                raise NotFoundError(errors.record_not_found("Expense", expense_id))

            if expense.is_paid:
                logger.debug("Expense %s is paid, reverting before delete", expense_id)
                self.revert_expense(expense_id)

            expenses = self._load(EXPENSES_KEY)
            self._save(EXPENSES_KEY, [e for e in expenses if e.id != expense_id])

        logger.info("Deleted expense %s (%s)", expense_id, expense.description)

    # Movement operations
    def list_movements(self) -> list[MovementView]:
        """List movements, most recent first, each with its bank's current name."""
        movements = self._load(MOVEMENTS_KEY)
        return self.join_bank_names(_by_date_desc(movements), self.list_banks())

    @staticmethod
    def join_bank_names(movements: list[Movement], banks: list[Bank]) -> list[MovementView]:
        """Attach bank names to movements, labelling dangling references."""
        names = {bank.id: bank.name for bank in banks}
        return [MovementView(movement=m, bank_name=names.get(m.bank_id, BANK_NOT_FOUND_LABEL)) for m in movements]

    def add_movement(self, date: Any, description: str, amount: Any, type: Any, bank_id: str) -> Movement:
        """Record a credit or debit and apply it to the bank's balance.

        Raises:
            ValidationError: If amount is not positive or a field is blank/invalid
            NotFoundError: If the bank does not exist
        """
        movement = Movement(
            id=self._new_id(),
            date=self._coerce_date(date),
            description=self._coerce_text(description, "Description"),
            amount=self._coerce_amount(amount, "Amount"),
            type=self._coerce_choice(type, MovementType, "movement type"),
            bank_id=self._coerce_text(bank_id, "Bank"),
        )
        with self._lock:
            banks = self.list_banks()
            bank = self._find(banks, movement.bank_id)
            if bank is None:
                raise NotFoundError(errors.record_not_found("Bank", movement.bank_id))

            movements = self._load(MOVEMENTS_KEY)
            movements.append(movement)
            adjusted = replace(bank, balance=bank.balance + movement.balance_effect)
            self._save_many({
                MOVEMENTS_KEY: movements,
                BANKS_KEY: self._replace_in(banks, adjusted),
            })

        logger.info("Added %s movement %s of %s on bank %s", movement.type.value, movement.id, movement.amount, bank.id)
        return movement

    def delete_movement(self, movement_id: str) -> None:
        """Delete a movement, reversing its effect on the bank if it still exists.

        Raises:
            NotFoundError: If movement not found
        """
        with self._lock:
            movements = self._load(MOVEMENTS_KEY)
            movement = self._find(movements, movement_id)
            if movement is None:
                raise NotFoundError(errors.record_not_found("Movement", movement_id))

            remaining = [m for m in movements if m.id != movement_id]
            banks = self.list_banks()
            bank = self._find(banks, movement.bank_id)
            if bank is None:
                self._save(MOVEMENTS_KEY, remaining)
            else:
                restored = replace(bank, balance=bank.balance - movement.balance_effect)
                self._save_many({
                    BANKS_KEY: self._replace_in(banks, restored),
                    MOVEMENTS_KEY: remaining,
                })

        logger.info("Deleted movement %s (%s)", movement_id, movement.description)

    # Investment operations
    def list_investments(self) -> list[Investment]:
        """List all investments, most recent first."""
        return _by_date_desc(self._load(INVESTMENTS_KEY))

    def add_investment(self, date: Any, description: str, amount: Any, type: Any, category: Any) -> Investment:
        """Record an investment deposit or withdrawal. No bank is touched.

        Raises:
            ValidationError: If amount is not positive or a field is blank/invalid
        """
        investment = Investment(
            id=self._new_id(),
            date=self._coerce_date(date),
            description=self._coerce_text(description, "Description"),
            amount=self._coerce_amount(amount, "Amount"),
            type=self._coerce_choice(type, InvestmentType, "investment type"),
            category=self._coerce_choice(category, InvestmentCategory, "category"),
        )
        with self._lock:
            investments = self._load(INVESTMENTS_KEY)
            investments.append(investment)
            self._save(INVESTMENTS_KEY, investments)

        logger.info("Added investment %s (%s %s)", investment.id, investment.type.value, investment.amount)
        return investment

    def delete_investment(self, investment_id: str) -> None:
        """Delete an investment.

        Raises:
            NotFoundError: If investment not found
        """
        with self._lock:
            investments = self._load(INVESTMENTS_KEY)
            if self._find(investments, investment_id) is None:
                raise NotFoundError(errors.record_not_found("Investment", investment_id))
            self._save(INVESTMENTS_KEY, [i for i in investments if i.id != investment_id])

        logger.info("Deleted investment %s", investment_id)

    # Tax operations
    def list_taxes(self) -> list[Tax]:
        """List all taxes, most recent first."""
        return _by_date_desc(self._load(TAXES_KEY))

    def get_tax(self, tax_id: str) -> Optional[Tax]:
        """Get tax by ID, or None if not found."""
        return self._find(self._load(TAXES_KEY), tax_id)

    def add_tax(self, type: Any, date: Any, amount: Any, description: str) -> Tax:
        """Create a new pending tax.

        Raises:
            ValidationError: If amount is not positive or a field is blank/invalid
        """
        tax = Tax(
            id=self._new_id(),
            type=self._coerce_choice(type, TaxType, "tax type"),
            date=self._coerce_date(date),
            amount=self._coerce_amount(amount, "Amount"),
            description=self._coerce_text(description, "Description"),
        )
        with self._lock:
            taxes = self._load(TAXES_KEY)
            taxes.append(tax)
            self._save(TAXES_KEY, taxes)

        logger.info("Added tax %s (%s, %s)", tax.id, tax.type.value, tax.amount)
        return tax

    def pay_tax(self, tax_id: str) -> Tax:
        """Pay a tax from the principal bank.

        Returns:
            The paid tax

        Raises:
            NotFoundError: If tax not found
            InvalidStateError: If tax is already paid
            NoPrincipalAccountError: If no bank is principal
            InsufficientFundsError: If the principal balance is below the amount
        """
        with self._lock:
            taxes = self._load(TAXES_KEY)
            banks = self.list_banks()

            tax = self._find(taxes, tax_id)
            if tax is None:
                raise NotFoundError(errors.record_not_found("Tax", tax_id))
            if tax.is_paid:
                raise InvalidStateError(errors.already_paid("Tax", tax_id))

            principal = self._require_principal(banks)
            if principal.balance < tax.amount:
                raise InsufficientFundsError(
                    errors.insufficient_funds(principal.name, principal.balance, tax.amount)
                )

            paid = replace(tax, status=TaxStatus.PAID, paid_date=self._today())
            debited = replace(principal, balance=principal.balance - tax.amount)
            self._save_many({
                TAXES_KEY: self._replace_in(taxes, paid),
                BANKS_KEY: self._replace_in(banks, debited),
            })

        logger.info("Paid tax %s from bank %s", tax_id, principal.id)
        return paid

    def delete_tax(self, tax_id: str) -> None:
        """Delete a tax, crediting the principal bank back if it was paid.

        Raises:
            NotFoundError: If tax not found
            NoPrincipalAccountError: If the tax is paid and no bank is principal
        """
        with self._lock:
            taxes = self._load(TAXES_KEY)
            tax = self._find(taxes, tax_id)
            if tax is None:
                raise NotFoundError(errors.record_not_found("Tax", tax_id))

            remaining = [t for t in taxes if t.id != tax_id]
            if tax.is_paid:
                banks = self.list_banks()
                principal = self._require_principal(banks)
                credited = replace(principal, balance=principal.balance + tax.amount)
                self._save_many({
                    BANKS_KEY: self._replace_in(banks, credited),
                    TAXES_KEY: remaining,
                })
            else:
                self._save(TAXES_KEY, remaining)

        logger.info("Deleted tax %s (%s)", tax_id, tax.description)

    # Derived summaries
    def compute_suggestions(self, available_balance: Any) -> Suggestions:
        """Spending suggestions for the rest of the current month."""
        return compute_suggestions(self._coerce_amount(available_balance, "Available balance", positive=False), self._today())

"""Domain model entities for pocketledger.

These are pure data classes representing the five ledger collections,
independent of how the key-value store serializes them. Entities are
immutable; the ledger service produces updated copies with
``dataclasses.replace`` and writes whole collections back.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ExpenseCategory(str, Enum):
    """Fixed set of expense categories."""

    ELECTRICITY = "Luz"
    WATER = "Água"
    INTERNET = "Internet"
    RENT = "Aluguel"
    GROCERIES = "Mercado"
    GIFT = "Presente"
    TRAVEL = "Viagem"
    CREDIT_CARD = "C.Crédito"
    OTHER = "Outros"


class InvestmentCategory(str, Enum):
    """Fixed set of investment categories."""

    CDI = "CDI"
    CDB = "CDB"
    TREASURY = "Tesouro"
    CONSORTIUM = "Consórcio"


class TaxType(str, Enum):
    """Fixed set of tax types."""

    DAS = "DAS"
    IR = "IR"
    IPVA = "IPVA"
    IPTU = "IPTU"
    OTHER = "Outro"


class MovementType(str, Enum):
    """Direction of a manual bank movement."""

    CREDIT = "credit"
    DEBIT = "debit"


class InvestmentType(str, Enum):
    """Direction of an investment entry."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TaxStatus(str, Enum):
    """Payment status of a tax obligation."""

    PENDING = "pending"
    PAID = "paid"


@dataclass(frozen=True)
class Bank:
    """Bank account domain entity."""

    id: str
    name: str
    balance: Decimal
    is_principal: bool = False


@dataclass(frozen=True)
class Expense:
    """Expense domain entity.

    ``paid_date`` is set if and only if ``is_paid`` is true.
    """

    id: str
    date: date
    description: str
    category: ExpenseCategory
    amount: Decimal
    is_paid: bool = False
    paid_date: Optional[date] = None


@dataclass(frozen=True)
class Movement:
    """Manual credit or debit against a single bank."""

    id: str
    date: date
    description: str
    amount: Decimal
    type: MovementType
    bank_id: str

    @property
    def balance_effect(self) -> Decimal:
        """Signed change this movement applies to its bank."""
        return self.amount if self.type == MovementType.CREDIT else -self.amount


@dataclass(frozen=True)
class MovementView:
    """Movement joined with the current name of its bank (never persisted)."""

    movement: Movement
    bank_name: str

    @property
    def id(self) -> str:
        return self.movement.id


@dataclass(frozen=True)
class Investment:
    """Investment entry domain entity."""

    id: str
    date: date
    description: str
    amount: Decimal
    type: InvestmentType
    category: InvestmentCategory

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == InvestmentType.DEPOSIT else -self.amount


@dataclass(frozen=True)
class Tax:
    """Tax obligation domain entity.

    ``paid_date`` is set if and only if ``status`` is ``TaxStatus.PAID``.
    """

    id: str
    type: TaxType
    date: date
    amount: Decimal
    description: str
    status: TaxStatus = TaxStatus.PENDING
    paid_date: Optional[date] = None

    @property
    def is_paid(self) -> bool:
        return self.status == TaxStatus.PAID


@dataclass(frozen=True)
class Suggestions:
    """Spending suggestions for the rest of the current month."""

    daily_suggestion: Decimal
    weekly_suggestion: Decimal
    emergency_reserve: Decimal
    spendable: Decimal
    remaining_days: int


@dataclass(frozen=True)
class LedgerSummary:
    """Aggregate totals shown on the overview."""

    total_balance: Decimal
    principal_balance: Decimal
    pending_expenses: Decimal
    pending_taxes: Decimal
    total_investments: Decimal
    available_balance: Decimal


@dataclass(frozen=True)
class SelfTestReport:
    """Outcome of the add-then-delete diagnostic."""

    bank_deleted: bool
    expense_deleted: bool

    @property
    def passed(self) -> bool:
        return self.bank_deleted and self.expense_deleted

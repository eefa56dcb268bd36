"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested record does not exist."""


class InvalidStateError(NotFoundError):
    """Record exists but is not in a state that allows the operation.

    Subclasses NotFoundError because callers treat "not found or already
    paid" as a single failure when they do not care about the difference.
    """


class NoPrincipalAccountError(DomainError):
    """A payment was attempted while no bank is flagged as principal."""


class InsufficientFundsError(DomainError):
    """A payment would drive the principal bank below zero."""


class StorageError(DomainError):
    """The key-value store failed to read or write a collection."""


def record_not_found(kind: str, record_id: str) -> str:
    """Return message for a missing record."""
    return f"{kind} '{record_id}' not found"


def already_paid(kind: str, record_id: str) -> str:
    """Return message for paying a record twice."""
    return f"{kind} '{record_id}' is already paid"


def not_paid(kind: str, record_id: str) -> str:
    """Return message for reverting a record that was never paid."""
    return f"{kind} '{record_id}' is not paid"


def no_principal_account() -> str:
    """Return message when no principal bank is defined."""
    return "No principal account defined. Mark a bank as principal first."


def insufficient_funds(bank_name: str, balance: Decimal, amount: Decimal) -> str:
    """Return message when the principal bank cannot cover a payment."""
    return (
        f"Insufficient funds in principal account '{bank_name}': "
        f"balance {balance}, payment {amount}"
    )


def must_be_positive(field: str) -> str:
    """Return message for a non-positive amount."""
    return f"{field} must be greater than zero"


def must_not_be_blank(field: str) -> str:
    """Return message for a missing or blank field."""
    return f"{field} is required"


def invalid_choice(field: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside an enumerated set."""
    return f"Invalid {field} '{value}'. Choose one of: {', '.join(choices)}"

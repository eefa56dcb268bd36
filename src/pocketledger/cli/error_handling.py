"""CLI error handling helpers."""

import click

from pocketledger.domain.errors import (
    DomainError,
    InsufficientFundsError,
    InvalidStateError,
    NoPrincipalAccountError,
    NotFoundError,
    StorageError,
    ValidationError,
)

# Most specific first: InvalidStateError is a NotFoundError
_PREFIXES = (
    (InsufficientFundsError, "Payment rejected, insufficient funds"),
    (NoPrincipalAccountError, "Payment rejected, no principal account"),
    (InvalidStateError, "Operation not allowed"),
    (NotFoundError, "Not found"),
    (ValidationError, "Invalid input"),
    (StorageError, "Storage failure"),
)


def describe_error(error: DomainError | ValueError) -> str:
    """Return a user-facing message naming the kind of failure."""
    for error_type, prefix in _PREFIXES:
        if isinstance(error, error_type):
            return f"{prefix}: {error}"
    return f"Error: {error}"


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(describe_error(error), err=True)
    ctx.exit(1)

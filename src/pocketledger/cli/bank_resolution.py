"""CLI helpers for bank resolution and error handling."""

from __future__ import annotations

import click
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.errors import DomainError
from pocketledger.domain.ledger import LedgerService
from pocketledger.utils.bank_resolver import resolve_bank


def resolve_bank_or_exit(ctx: click.Context, ledger: LedgerService, bank: str) -> str:
    """Resolve bank name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_bank(ledger, bank)
    except DomainError as exc:
        handle_domain_error(ctx, exc)

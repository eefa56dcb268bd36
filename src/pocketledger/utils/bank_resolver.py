"""Utility for resolving bank names to IDs."""

from pocketledger.domain.errors import NotFoundError, ValidationError
from pocketledger.domain.ledger import LedgerService


def resolve_bank(ledger: LedgerService, bank: str) -> str:
    """Resolve bank name or ID to bank ID.

    Args:
        ledger: LedgerService instance
        bank: Bank ID, or bank name (case-insensitive)

    Returns:
        Bank ID

    Raises:
        NotFoundError: If no bank matches
        ValidationError: If the name matches more than one bank
    """
    banks = ledger.list_banks()

    # Exact ID match wins over names
    for candidate in banks:
        if candidate.id == bank:
            return candidate.id

    matches = [b for b in banks if b.name.strip().lower() == bank.strip().lower()]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        raise ValidationError(
            f"Bank name '{bank}' is ambiguous; use one of the IDs: "
            + ", ".join(b.id for b in matches)
        )

    raise NotFoundError(f"Bank '{bank}' not found")

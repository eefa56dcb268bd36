"""Domain layer for pocketledger application."""

from pocketledger.domain.suggestions import compute_suggestions
from pocketledger.domain.summary import build_ledger_summary

__all__ = [
    "LedgerService",
    "compute_suggestions",
    "build_ledger_summary",
]


# LedgerService imports the storage layer, which imports domain errors;
# load it lazily to avoid a circular import through this package.
def __getattr__(name):
    if name == "LedgerService":
        from pocketledger.domain.ledger import LedgerService
        return LedgerService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

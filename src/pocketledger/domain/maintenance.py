"""Best-effort maintenance operations: factory reset and deletion self-test.

Unlike ledger operations these never raise domain errors; failures are
logged and reported through the return value.
"""

import logging

from pocketledger.domain.entities import ExpenseCategory, SelfTestReport
from pocketledger.domain.errors import DomainError
from pocketledger.domain.ledger import LedgerService
from pocketledger.storage.base import COLLECTION_KEYS, KeyValueStore

logger = logging.getLogger(__name__)

SELF_TEST_BANK_NAME = "Self-test bank"
SELF_TEST_EXPENSE_DESCRIPTION = "Self-test expense"


def clear_all_data(store: KeyValueStore) -> bool:
    """Remove every ledger collection from the store.

    Returns:
        True if the store reported success, False if it failed (logged)
    """
    try:
        store.remove_many(COLLECTION_KEYS)
    except DomainError as e:
        logger.error("Could not clear ledger data: %s", e)
        return False
    logger.info("Cleared all ledger data")
    return True


def _discard(kind: str, record_id: str, getter, deleter) -> None:
    """Remove a self-test record that is still stored after a failed step."""
    try:
        if getter(record_id) is None:
            return
        deleter(record_id)
        logger.info("Removed leftover self-test %s %s", kind, record_id)
    except DomainError as e:
        logger.error("Could not remove self-test %s %s: %s", kind, record_id, e)


def run_self_test(ledger: LedgerService) -> SelfTestReport:
    """Add a throwaway bank and expense, delete each and check they are gone.

    A record whose deletion failed is removed again before returning, so
    the diagnostic leaves no data behind when the store recovers.

    Returns:
        SelfTestReport telling which deletions were observed
    """
    bank_deleted = False
    expense_deleted = False

    bank = None
    try:
        bank = ledger.add_bank(SELF_TEST_BANK_NAME, "1000", is_principal=False)
        ledger.delete_bank(bank.id)
        bank_deleted = ledger.get_bank(bank.id) is None
        logger.info("Self-test bank deletion observed: %s", bank_deleted)
    except DomainError as e:
        logger.error("Self-test bank step failed: %s", e)
    finally:
        if bank is not None and not bank_deleted:
            _discard("bank", bank.id, ledger.get_bank, ledger.delete_bank)

    expense = None
    try:
        expense = ledger.add_expense(
            date=ledger.today(),
            description=SELF_TEST_EXPENSE_DESCRIPTION,
            category=ExpenseCategory.OTHER,
            amount="100",
        )
        ledger.delete_expense(expense.id)
        expense_deleted = ledger.get_expense(expense.id) is None
        logger.info("Self-test expense deletion observed: %s", expense_deleted)
    except DomainError as e:
        logger.error("Self-test expense step failed: %s", e)
    finally:
        if expense is not None and not expense_deleted:
            _discard("expense", expense.id, ledger.get_expense, ledger.delete_expense)

    return SelfTestReport(bank_deleted=bank_deleted, expense_deleted=expense_deleted)

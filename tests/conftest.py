"""Shared pytest fixtures for pocketledger tests."""

import tempfile
import os
from datetime import date
import pytest

from pocketledger.domain.ledger import LedgerService
from pocketledger.storage.factories import create_sqlite_store
from pocketledger.storage.memory import InMemoryStore

# 21 September 2026: a 30-day month with 10 days remaining
FIXED_TODAY = date(2026, 9, 21)


@pytest.fixture
def temp_store():
    """Create a temporary SQLite-backed store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def ledger(temp_store):
    """Create a LedgerService over a temporary store with a fixed clock."""
    return LedgerService(temp_store, today=lambda: FIXED_TODAY)


@pytest.fixture
def memory_ledger(memory_store):
    """Create a LedgerService over an in-memory store with a fixed clock."""
    return LedgerService(memory_store, today=lambda: FIXED_TODAY)


@pytest.fixture
def principal_bank(ledger):
    """Create a principal bank holding 500."""
    return ledger.add_bank(name="Principal Bank", initial_balance="500", is_principal=True)


@pytest.fixture
def sample_expense(ledger):
    """Create an unpaid expense of 200."""
    return ledger.add_expense(
        date="2026-09-10",
        description="Electricity bill",
        category="Luz",
        amount="200",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

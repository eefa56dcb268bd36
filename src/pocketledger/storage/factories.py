"""Store factory functions for creating store instances."""

import os
from pathlib import Path
from typing import Optional

from pocketledger.storage.sqlalchemy_store import SQLAlchemyStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Create a SQLite-backed store instance.

    Args:
        database_path: Path to SQLite database file. If None, checks POCKETLEDGER_DB_PATH
            environment variable, then defaults to ~/.pocketledger/pocketledger.db

    Returns:
        SQLAlchemyStore instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("POCKETLEDGER_DB_PATH")

    if database_path is None:
        # Default to ~/.pocketledger/pocketledger.db
        home = Path.home()
        db_dir = home / ".pocketledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "pocketledger.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyStore(database_url)

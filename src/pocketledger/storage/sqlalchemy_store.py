"""Generic SQLAlchemy key-value store implementation."""

import json
import logging
from typing import Any, Iterable, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocketledger.domain.errors import StorageError
from pocketledger.storage.base import KeyValueStore
from pocketledger.storage.models import StoreEntry, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyStore(KeyValueStore):
    """SQLAlchemy-based implementation of the KeyValueStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get(self, key: str) -> Optional[Any]:
        """Return the JSON value stored under key, or None if absent."""
        session = self._get_session()
        try:
            # Always hit the database; another process may have written the key
            entry = session.get(StoreEntry, key, populate_existing=True)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not read '{key}': {e}") from e
        if entry is None:
            return None
        try:
            return json.loads(entry.value)
        except ValueError as e:
            raise StorageError(f"Stored value for '{key}' is not valid JSON: {e}") from e

    def set(self, key: str, value: Any) -> None:
        """Store a JSON value under key, replacing any previous value."""
        self.set_many({key: value})

    def set_many(self, items: dict[str, Any]) -> None:
        """Store several values in a single transaction."""
        serialized = {key: self._serialize(key, value) for key, value in items.items()}
        session = self._get_session()
        try:
            for key, text in serialized.items():
                entry = session.get(StoreEntry, key, populate_existing=True)
                if entry is None:
                    session.add(StoreEntry(key=key, value=text))
                else:
                    entry.value = text
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not write {', '.join(serialized)}: {e}") from e
        logger.debug("Wrote keys: %s", ", ".join(serialized))

    def remove_many(self, keys: Iterable[str]) -> None:
        """Remove every listed key. Missing keys are ignored."""
        keys = list(keys)
        session = self._get_session()
        try:
            session.query(StoreEntry).filter(StoreEntry.key.in_(keys)).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not remove {', '.join(keys)}: {e}") from e
        logger.debug("Removed keys: %s", ", ".join(keys))

    @staticmethod
    def _serialize(key: str, value: Any) -> str:
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON serializable: {e}") from e

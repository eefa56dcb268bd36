"""Storage layer for pocketledger application."""

from pocketledger.storage.base import COLLECTION_KEYS, KeyValueStore
from pocketledger.storage.factories import create_sqlite_store
from pocketledger.storage.memory import InMemoryStore

__all__ = ["COLLECTION_KEYS", "KeyValueStore", "InMemoryStore", "create_sqlite_store"]

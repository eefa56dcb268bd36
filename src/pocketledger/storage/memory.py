"""In-memory key-value store implementation."""

import copy
import json
from typing import Any, Iterable, Optional

from pocketledger.domain.errors import StorageError
from pocketledger.storage.base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """KeyValueStore keeping values in a dict.

    Values are round-tripped through JSON on write so the same
    serialization faults surface as with a persistent backend.
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def get(self, key: str) -> Optional[Any]:
        text = self._data.get(key)
        if text is None:
            return None
        return json.loads(text)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON serializable: {e}") from e

    def set_many(self, items: dict[str, Any]) -> None:
        staged = copy.copy(self._data)
        for key, value in items.items():
            try:
                staged[key] = json.dumps(value, ensure_ascii=False)
            except (TypeError, ValueError) as e:
                raise StorageError(f"Value for '{key}' is not JSON serializable: {e}") from e
        self._data = staged

    def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Return the keys currently stored."""
        return list(self._data)

"""Abstract key-value store interface."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

BANKS_KEY = "banks"
EXPENSES_KEY = "expenses"
MOVEMENTS_KEY = "movements"
INVESTMENTS_KEY = "investments"
TAXES_KEY = "taxes"

COLLECTION_KEYS = (BANKS_KEY, EXPENSES_KEY, MOVEMENTS_KEY, INVESTMENTS_KEY, TAXES_KEY)


class KeyValueStore(ABC):
    """Abstract key-value store holding JSON values.

    Implementations raise ``pocketledger.domain.errors.StorageError`` when
    the underlying medium fails or a value cannot be (de)serialized.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create whatever backing structure the store needs."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the JSON value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_many(self, keys: Iterable[str]) -> None:
        """Remove every listed key. Missing keys are ignored."""
        pass

    def set_many(self, items: dict[str, Any]) -> None:
        """Store several values.

        The default writes keys one by one; backends with transactions
        override this so the values land together or not at all.
        """
        for key, value in items.items():
            self.set(key, value)

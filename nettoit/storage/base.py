"""Key-value storage interface."""

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """String key-value store with last-write-wins semantics.

    Injected into InputStore; the estimator never touches it.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*. Removing an absent key is a no-op."""
        ...

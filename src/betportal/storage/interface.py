"""
Client storage interface definition.

Models the browser-style key-value capability the auth pages persist the
session token in. Reads and writes are synchronous, like ``localStorage``.
"""

from abc import ABC, abstractmethod

from betportal.shared.exceptions import StorageError, StorageUnavailableError


class ClientStorage(ABC):
    """Abstract key-value storage available only in a live client environment.

    Implementations raise ``StorageError`` (or a subclass) on failure. Callers
    that must never fail, such as the token initializer, catch it.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
        ...


__all__ = [
    "ClientStorage",
    "StorageError",
    "StorageUnavailableError",
]

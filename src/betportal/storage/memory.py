"""
In-memory client storage for tests and the "memory" storage backend.
"""

import logging

from betportal.shared.exceptions import StorageError
from betportal.storage.interface import ClientStorage

logger = logging.getLogger(__name__)


class InMemoryStorage(ClientStorage):
    """Dict-backed storage that records reads and can be told to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})
        self._reads: list[str] = []
        self._should_fail: bool = False
        self._fail_error: str = "Mock storage failure"

    def reset(self) -> None:
        self._items.clear()
        self._reads.clear()
        self._should_fail = False
        self._fail_error = "Mock storage failure"

    def configure_failure(
        self,
        should_fail: bool = True,
        error_message: str = "Mock storage failure",
    ) -> None:
        self._should_fail = should_fail
        self._fail_error = error_message

    @property
    def reads(self) -> list[str]:
        return self._reads.copy()

    @property
    def items(self) -> dict[str, str]:
        return self._items.copy()

    def get_item(self, key: str) -> str | None:
        self._reads.append(key)
        if self._should_fail:
            raise StorageError(self._fail_error, details={"key": key})
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._should_fail:
            raise StorageError(self._fail_error, details={"key": key})
        self._items[key] = value
        logger.debug("Memory storage: item set", extra={"key": key})

    def remove_item(self, key: str) -> None:
        if self._should_fail:
            raise StorageError(self._fail_error, details={"key": key})
        self._items.pop(key, None)

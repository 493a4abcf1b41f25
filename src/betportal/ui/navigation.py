"""
Navigation contract consumed by the pages.
"""

from typing import Protocol

from betportal.shared.logging import get_logger

logger = get_logger(__name__)


class Navigator(Protocol):
    """Capability to move the client to another view."""

    def replace(self, route: str) -> None:
        """Show ``route`` in place of the current view, leaving no history entry."""
        ...

    def push(self, route: str) -> None:
        """Show ``route`` and keep the current view in history."""
        ...


class HistoryNavigator:
    """In-process navigator keeping a history stack.

    Used by the server pass and by tests; a real client wires its own
    ``Navigator``.
    """

    def __init__(self, initial_route: str = "/") -> None:
        self._history: list[str] = [initial_route]

    @property
    def current(self) -> str:
        return self._history[-1]

    @property
    def history(self) -> list[str]:
        return self._history.copy()

    def replace(self, route: str) -> None:
        logger.info("Navigation replace", extra={"from": self.current, "to": route})
        self._history[-1] = route

    def push(self, route: str) -> None:
        logger.info("Navigation push", extra={"from": self.current, "to": route})
        self._history.append(route)

    def back(self) -> str:
        if len(self._history) > 1:
            self._history.pop()
        return self.current

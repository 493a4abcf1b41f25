"""
Lazily initialized access to the persisted auth token.

The token lives in client-only storage. It is read on first use, at most once
per ``PersistedToken`` instance, and memoized as a tagged state:

    Uninitialized  -> no read attempted yet
    Loaded(token)  -> read done; ``token`` is None when nothing usable was found

A missing storage capability and a failing storage read both end in
``Loaded(None)``. Callers cannot tell them apart; the log can.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from betportal.shared.exceptions import StorageUnavailableError
from betportal.shared.logging import get_logger
from betportal.storage.interface import ClientStorage

logger = get_logger(__name__)

DEFAULT_TOKEN_KEY = "auth_token"


@dataclass(frozen=True)
class Uninitialized:
    """No storage read has been attempted."""


@dataclass(frozen=True)
class Loaded:
    """Storage has been consulted; ``token`` is the outcome."""

    token: str | None = None


TokenState = Union[Uninitialized, Loaded]

UNINITIALIZED = Uninitialized()


class PersistedToken:
    """Owner of one client token and the one-shot read that produces it."""

    def __init__(
        self,
        storage: ClientStorage | None,
        key: str = DEFAULT_TOKEN_KEY,
    ) -> None:
        """Initialize the accessor.

        Args:
            storage: Client storage, or None when the environment has none.
            key: Storage key the token is persisted under.
        """
        self._storage = storage
        self._key = key
        self._state: TokenState = UNINITIALIZED

    @property
    def state(self) -> TokenState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return isinstance(self._state, Loaded)

    def ensure_initialized(self) -> None:
        """Read the token from storage unless that already happened.

        Never raises and never retries: absence or failure both settle the
        state to ``Loaded(None)``.
        """
        if isinstance(self._state, Loaded):
            return

        if self._storage is None:
            logger.info("Client storage unavailable; no token", extra={"key": self._key})
            self._state = Loaded(None)
            return

        try:
            value = self._storage.get_item(self._key)
        except StorageUnavailableError as e:
            logger.info(
                "Client storage restricted; no token",
                extra={"key": self._key, "error": str(e)},
            )
            self._state = Loaded(None)
            return
        except Exception as e:
            # Storage failures collapse to "no token".
            logger.warning(
                "Client storage read failed; treating as no token",
                extra={"key": self._key, "error": str(e), "error_type": type(e).__name__},
            )
            self._state = Loaded(None)
            return

        self._state = Loaded(value or None)
        logger.debug("Token initialized", extra={"key": self._key, "present": bool(value)})

    def get_token(self) -> str | None:
        """Return the token, reading storage on first call. Never raises."""
        self.ensure_initialized()
        assert isinstance(self._state, Loaded)
        return self._state.token

    def save(self, token: str) -> None:
        """Remember ``token`` and persist it when storage allows.

        A failed write keeps the token in memory for this instance's lifetime.
        """
        self._state = Loaded(token)
        if self._storage is None:
            return
        try:
            self._storage.set_item(self._key, token)
        except Exception as e:
            logger.warning(
                "Client storage write failed; token kept in memory only",
                extra={"key": self._key, "error": str(e)},
            )

    def clear(self) -> None:
        """Forget the token here and in storage."""
        self._state = Loaded(None)
        if self._storage is None:
            return
        try:
            self._storage.remove_item(self._key)
        except Exception as e:
            logger.warning(
                "Client storage remove failed",
                extra={"key": self._key, "error": str(e)},
            )

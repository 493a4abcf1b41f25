"""
Deferred, memoized loading of the auth API client.

The client module is imported only once a page is attached to a live client,
never during the server pass. One loader exists per application instance and
is handed to every page that needs the client.
"""

from __future__ import annotations

import asyncio
import importlib
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import anyio

from betportal.config import Settings, get_settings
from betportal.shared.logging import get_logger
from betportal.storage.interface import ClientStorage

if TYPE_CHECKING:
    from betportal.auth.client import ApiClient

logger = get_logger(__name__)

CLIENT_MODULE = "betportal.auth.client"

ClientFactory = Callable[[], Awaitable["ApiClient"]]


class ApiClientLoader:
    """Build the ``ApiClient`` on first ``load()`` and hand out the same one afterwards."""

    def __init__(
        self,
        settings: Settings | None = None,
        storage: ClientStorage | None = None,
        factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._storage = storage
        self._factory = factory or self._import_client
        self._client: ApiClient | None = None
        self._lock = asyncio.Lock()

    @property
    def client(self) -> ApiClient | None:
        """The loaded client, or None before the first ``load()`` completes."""
        return self._client

    @property
    def is_loaded(self) -> bool:
        return self._client is not None

    async def load(self) -> ApiClient:
        """Return the client, building it on first call.

        Concurrent callers wait for the same build.
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                self._client = await self._factory()
                logger.info("API client loaded", extra={"api_base_url": self._settings.api_base_url})
        return self._client

    async def _import_client(self) -> ApiClient:
        module = await anyio.to_thread.run_sync(importlib.import_module, CLIENT_MODULE)
        return module.ApiClient(settings=self._settings, storage=self._storage)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

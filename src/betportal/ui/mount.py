"""
Mount-gated rendering for pages rendered once on the server and again on the client.

Until ``on_attach()`` has run, a page renders only its placeholder, which is
exactly what the server pass produced. Client-only capabilities (persisted
storage, the API client) are touched after attach, never before.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from betportal.auth.loader import ApiClientLoader
from betportal.shared.logging import get_logger
from betportal.ui.views import PlaceholderView, View

if TYPE_CHECKING:
    from betportal.auth.client import ApiClient

logger = get_logger(__name__)


class MountGuard(ABC):
    """Base class for pages that must not go interactive before attach."""

    def __init__(self, loader: ApiClientLoader) -> None:
        self._loader = loader
        self._mounted = False
        self._client: ApiClient | None = None
        # Set once attach has finished, whether or not the client loaded.
        self.ready = asyncio.Event()

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def client(self) -> ApiClient | None:
        return self._client

    @property
    def is_ready(self) -> bool:
        """Mounted and holding a loaded client."""
        return self._mounted and self._client is not None

    async def on_attach(self) -> None:
        """Mark the page mounted and load the API client.

        Only the first call has an effect; the mount flag is never reset.
        """
        if self._mounted:
            logger.debug("Attach ignored; already mounted", extra={"page": type(self).__name__})
            return

        self._mounted = True
        logger.info("Page mounted", extra={"page": type(self).__name__})

        try:
            self._client = await self._loader.load()
        except Exception:
            # The page stays on its "still loading" path; nothing is fatal here.
            logger.exception("API client load failed", extra={"page": type(self).__name__})
        finally:
            self.ready.set()

    def render(self) -> View:
        if not self._mounted:
            return self.render_placeholder()
        return self.render_interactive()

    @abstractmethod
    def render_placeholder(self) -> PlaceholderView:
        ...

    @abstractmethod
    def render_interactive(self) -> View:
        ...

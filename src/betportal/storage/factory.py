"""
Client storage factory.

Single source of truth for which storage backend a client environment gets.
``None`` means the environment has no client storage at all (the server-side
rendering pass, or a client that blocks storage).
"""

from __future__ import annotations

from betportal.config import Settings, get_settings
from betportal.shared.logging import get_logger
from betportal.storage.file_store import FileStorage
from betportal.storage.interface import ClientStorage
from betportal.storage.memory import InMemoryStorage

logger = get_logger(__name__)


def create_client_storage(settings: Settings | None = None) -> ClientStorage | None:
    """Build the client storage configured by ``storage_backend``."""
    settings = settings or get_settings()
    backend = settings.storage_backend

    logger.info(
        "Client storage resolved",
        extra={"storage_backend": backend, "storage_path": settings.storage_path},
    )

    if backend == "file":
        return FileStorage(settings.storage_path)

    if backend == "memory":
        return InMemoryStorage()

    if backend == "none":
        return None

    raise ValueError(f"Unsupported storage_backend: {backend}")

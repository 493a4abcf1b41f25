"""Client-side persisted key-value storage."""

from betportal.storage.factory import create_client_storage
from betportal.storage.file_store import FileStorage
from betportal.storage.interface import ClientStorage
from betportal.storage.memory import InMemoryStorage

__all__ = [
    "ClientStorage",
    "FileStorage",
    "InMemoryStorage",
    "create_client_storage",
]

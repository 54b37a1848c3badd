"""Storage layer for project persistence."""

from .local_storage import LocalStorage
from .remote_storage import RemoteStorage, RemoteStorageError
from .storage_manager import StorageManager

__all__ = ["LocalStorage", "RemoteStorage", "RemoteStorageError", "StorageManager"]

"""
Storage Services Package

Provides the abstract collection interface, its implementations, and
the typed repository used by the managers.
"""

from walletbook.services.storage.interface import (
    Collection,
    CollectionStorageInterface,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)
from walletbook.services.storage.json_file import JsonFileStorage
from walletbook.services.storage.memory import InMemoryStorage
from walletbook.services.storage.repository import CollectionRepository

__all__ = [
    # Interface
    "Collection",
    "CollectionStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "CollectionRepository",
    "InMemoryStorage",
    "JsonFileStorage",
]

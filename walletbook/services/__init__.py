"""Services package."""

from walletbook.services.storage import (
    Collection,
    CollectionRepository,
    CollectionStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    "Collection",
    "CollectionRepository",
    "CollectionStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
]

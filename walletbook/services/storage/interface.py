"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON files for another key-value store later
2. Use in-memory storage for testing
3. Keep the managers decoupled from where bytes end up

The interface is intentionally tiny. Each collection is a single value
holding a JSON array; a write replaces the whole value. There are no
partial updates and no cross-collection transactions.
"""

from abc import ABC, abstractmethod
from enum import Enum


class Collection(str, Enum):
    """Names of the persisted collections (the storage keys)."""
    WALLETS = "wallets"
    TRANSACTIONS = "transactions"
    LOANS = "loans"


class CollectionStorageInterface(ABC):
    """
    Abstract interface for collection storage.

    Any storage implementation (JSON files, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def read(self, collection: Collection) -> list[dict]:
        """
        Read every record of a collection.

        Args:
            collection: The collection to read

        Returns:
            The stored records in stored order, or an empty list
            if the collection has never been written

        Raises:
            StorageError: If the stored value cannot be decoded or
                the backend cannot be read
        """
        pass

    @abstractmethod
    async def write(self, collection: Collection, records: list[dict]) -> bool:
        """
        Replace the whole value of a collection.

        Args:
            collection: The collection to overwrite
            records: JSON-compatible records, in the order to store them

        Returns:
            True if written successfully

        Raises:
            StorageError: If the records cannot be serialized or written
        """
        pass

    @abstractmethod
    async def exists(self, collection: Collection) -> bool:
        """Check whether a collection has ever been written."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Referenced wallet or record not found in storage."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend cannot be reached at all."""
    pass

"""
In-Memory Storage Implementation

Used by tests and for throwaway sessions. Values are kept as serialized
JSON strings rather than live objects so that the same serialization
failures surface here as they would on disk, and callers can never
mutate stored state through a reference they still hold.
"""

import json
from typing import Optional

from walletbook.services.storage.interface import (
    Collection,
    CollectionStorageInterface,
    StorageError,
)


class InMemoryStorage(CollectionStorageInterface):
    """Dict-backed collection storage."""

    def __init__(self, initial: Optional[dict[Collection, list[dict]]] = None):
        self._values: dict[str, str] = {}
        self.write_count = 0
        for collection, records in (initial or {}).items():
            self._values[Collection(collection).value] = json.dumps(records)

    async def read(self, collection: Collection) -> list[dict]:
        raw = self._values.get(Collection(collection).value)
        if raw is None:
            return []
        return json.loads(raw)

    async def write(self, collection: Collection, records: list[dict]) -> bool:
        try:
            raw = json.dumps(records)
        except (TypeError, ValueError) as e:
            raise StorageError(
                f"Failed to serialize {collection.value}: {e}"
            ) from e
        self._values[Collection(collection).value] = raw
        self.write_count += 1
        return True

    async def exists(self, collection: Collection) -> bool:
        return Collection(collection).value in self._values

    def clear(self) -> None:
        self._values.clear()

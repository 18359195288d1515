"""
Typed Collection Repository

Binds one collection to one record model. This is the storage boundary:
raw dicts go in and out of the backend, validated models go in and out
of the managers. A record that does not fit its model is rejected here
with a StorageError naming the collection and position, rather than
surfacing later as an AttributeError deep in business logic.
"""

from typing import Generic, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from walletbook.models.ledger import StoredRecord
from walletbook.services.storage.interface import (
    Collection,
    CollectionStorageInterface,
    StorageError,
)

RecordT = TypeVar("RecordT", bound=StoredRecord)


class CollectionRepository(Generic[RecordT]):
    """Load and save a whole collection as a list of models."""

    def __init__(
        self,
        storage: CollectionStorageInterface,
        collection: Collection,
        model: Type[RecordT],
    ):
        self._storage = storage
        self._collection = collection
        self._model = model

    @property
    def collection(self) -> Collection:
        return self._collection

    async def load(self) -> list[RecordT]:
        """
        Read and validate every record.

        Raises:
            StorageError: If the backend fails or any record is malformed
        """
        raw_records = await self._storage.read(self._collection)

        records = []
        for index, raw in enumerate(raw_records):
            if not isinstance(raw, dict):
                raise StorageError(
                    f"Malformed record in {self._collection.value} at index {index}: "
                    f"expected an object, found {type(raw).__name__}"
                )
            try:
                records.append(self._model.model_validate(raw))
            except PydanticValidationError as e:
                raise StorageError(
                    f"Malformed record in {self._collection.value} at index {index}: "
                    f"{e.error_count()} invalid field(s): {e}"
                ) from e
        return records

    async def save(self, records: list[RecordT]) -> bool:
        """Replace the collection with the given records, in order."""
        payload = [
            record.model_dump(mode="json", by_alias=True)
            for record in records
        ]
        return await self._storage.write(self._collection, payload)

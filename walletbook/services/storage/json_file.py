"""
JSON File Storage Implementation

DESIGN DECISION: Local JSON files are the storage backend because:
1. The app is single-user and single-device
2. No database setup required
3. Users can inspect and back up their data with any text editor

Each collection lives in its own file, `<data_dir>/<collection>.json`,
holding a JSON array of records.

TRADEOFFS:
- Every write rewrites a whole collection (fine for personal volumes)
- No transactions across collections (callers order their writes)
- Filtering happens in Python after a full read

A single file is never left half-written: data goes to a temporary file
in the same directory which is then renamed over the target. Two files
written one after the other can still diverge if the process dies in
between.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from walletbook.config import get_settings
from walletbook.services.storage.interface import (
    Collection,
    CollectionStorageInterface,
    StorageError,
    StorageUnavailableError,
)


class JsonFileStorage(CollectionStorageInterface):
    """
    File-per-collection implementation of collection storage.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir) if data_dir else get_settings().storage.data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, collection: Collection) -> Path:
        return self._data_dir / f"{Collection(collection).value}.json"

    def _ensure_data_dir(self) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot create data directory {self._data_dir}: {e}"
            ) from e
        if not os.access(self._data_dir, os.W_OK):
            raise StorageUnavailableError(
                f"Data directory is not writable: {self._data_dir}"
            )

    async def read(self, collection: Collection) -> list[dict]:
        """Read a collection file. A missing file is an empty collection."""
        path = self._path_for(collection)

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {collection.value}: {e}") from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Collection {collection.value} is not valid JSON: {e}"
            ) from e

        if not isinstance(payload, list):
            raise StorageError(
                f"Collection {collection.value} must hold a JSON array, "
                f"found {type(payload).__name__}"
            )

        return payload

    async def write(self, collection: Collection, records: list[dict]) -> bool:
        """Serialize the records and atomically replace the collection file."""
        try:
            raw = json.dumps(records, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError(
                f"Failed to serialize {collection.value}: {e}"
            ) from e

        self._ensure_data_dir()
        path = self._path_for(collection)

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.stem}-", suffix=".tmp", dir=self._data_dir
            )
        except OSError as e:
            raise StorageError(f"Failed to write {collection.value}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(raw)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write {collection.value}: {e}") from e

        return True

    async def exists(self, collection: Collection) -> bool:
        return self._path_for(collection).is_file()

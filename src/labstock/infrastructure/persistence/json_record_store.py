"""Generic JSON-file record store: one ``<collection>.json`` per collection.

Every call reads the whole file, mutates it in memory and writes it
back.  Writes go to a temporary file that is then renamed over the
original, so a reader never sees a half-written collection.  Calls on
the same collection are serialized by a per-collection lock; whole
read-check-write cycles across calls are the WriteGuard's job.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Predicate = Callable[[Record], bool]


class StorageError(Exception):
    """The store could not be read or written."""


class JsonRecordStore:

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    # --- CRUD -----------------------------------------------------------------

    def create(self, collection: str, record: Record) -> Record:
        """Append *record* with a fresh UUID4 ``id`` and return the stored copy.

        ``None`` values are not written.
        """
        with self._lock(collection):
            records = self._load(collection)
            stored = {k: v for k, v in record.items() if v is not None}
            stored["id"] = str(uuid.uuid4())
            records.append(stored)
            self._persist(collection, records)
        return dict(stored)

    def read_all(self, collection: str) -> list[Record]:
        with self._lock(collection):
            return self._load(collection)

    def find_by_id(self, collection: str, record_id: str) -> Record | None:
        return self.find_one(collection, lambda r: r.get("id") == record_id)

    def find_one(self, collection: str, predicate: Predicate) -> Record | None:
        for record in self.read_all(collection):
            if predicate(record):
                return record
        return None

    def find_many(self, collection: str, predicate: Predicate) -> list[Record]:
        return [r for r in self.read_all(collection) if predicate(r)]

    def update_by_id(self, collection: str, record_id: str, updates: Record) -> Record | None:
        """Shallow-merge *updates* into a record.  ``None`` values drop the key.

        Returns the updated record, or None if no record has that id.
        """
        with self._lock(collection):
            records = self._load(collection)
            for i, record in enumerate(records):
                if record.get("id") == record_id:
                    merged = {**record, **updates, "id": record_id}
                    records[i] = {k: v for k, v in merged.items() if v is not None}
                    self._persist(collection, records)
                    return dict(records[i])
        return None

    def put(self, collection: str, record: Record) -> Record:
        """Replace the record with the same ``id``, or append it."""
        record_id = record["id"]
        with self._lock(collection):
            records = self._load(collection)
            stored = {k: v for k, v in record.items() if v is not None}
            for i, existing in enumerate(records):
                if existing.get("id") == record_id:
                    records[i] = stored
                    break
            else:
                records.append(stored)
            self._persist(collection, records)
        return dict(stored)

    def delete_by_id(self, collection: str, record_id: str) -> bool:
        with self._lock(collection):
            records = self._load(collection)
            remaining = [r for r in records if r.get("id") != record_id]
            if len(remaining) == len(records):
                return False
            self._persist(collection, remaining)
        return True

    # --- File helpers ---------------------------------------------------------

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _lock(self, collection: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(collection)
            if lock is None:
                lock = threading.RLock()
                self._locks[collection] = lock
            return lock

    def _load(self, collection: str) -> list[Record]:
        path = self._path(collection)
        if not path.exists():
            self._persist(collection, [])
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            logger.error("collection %s is not valid JSON: %s", path, exc)
            raise StorageError(f"Collection '{collection}' is corrupt") from exc
        except OSError as exc:
            logger.error("cannot read %s: %s", path, exc)
            raise StorageError(f"Collection '{collection}' could not be read") from exc
        if not isinstance(data, list):
            raise StorageError(f"Collection '{collection}' is not a list of records")
        return data

    def _persist(self, collection: str, records: list[Record]) -> None:
        path = self._path(collection)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{collection}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(records, indent=2) + "\n")
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("cannot write %s: %s", path, exc)
            raise StorageError(f"Collection '{collection}' could not be written") from exc

"""Mini README: Record store over the key-value backend.

Structure:
    * RecordStore - list/get/create/update/delete for one collection at a time.
    * RecordStore.clear - forget every stored collection (used by ``fynov reset``).

Each collection is one JSON array stored under the collection's key. Every
operation reads the whole array, works on it and writes the whole array
back, so each call is self-contained and last write wins.

Failure handling mirrors what a browser page can afford: a damaged blob
reads as an empty collection, a damaged entry is skipped, and a failed write
is logged without being raised. Callers therefore must not assume a write
succeeded.
"""

from __future__ import annotations

import json
import time
from typing import Dict, List, Mapping, Optional

from ..finance.records import Collection, Record, coerce_fields, record_from_dict
from ..logging_utils import get_logger
from .backends import KeyValueBackend, StorageError

LOGGER = get_logger(__name__)


def _entry_id(entry: Mapping[str, object]) -> Optional[int]:
    """Persisted id as an int, tolerating ids saved as numeric strings."""

    try:
        return int(entry.get("id"))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


class RecordStore:
    """Synchronous CRUD over the income, expense and goal collections."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend
        LOGGER.debug("Record store initialised with %s backend", backend.backend_name)

    def _load(self, collection: Collection) -> List[Dict[str, object]]:
        """Return the raw persisted objects, recovering from corruption."""

        try:
            raw = self.backend.get_item(collection.value)
        except StorageError as error:
            LOGGER.error("Collection '%s' could not be read, reading as empty: %s", collection.value, error)
            return []
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as error:
            LOGGER.error("Collection '%s' holds invalid JSON, reading as empty: %s", collection.value, error)
            return []
        if not isinstance(payload, list):
            LOGGER.error("Collection '%s' is not a JSON array, reading as empty", collection.value)
            return []
        entries: List[Dict[str, object]] = []
        for entry in payload:
            if isinstance(entry, dict):
                entries.append(entry)
            else:
                LOGGER.error("Dropping non-object entry in '%s': %r", collection.value, entry)
        return entries

    def _save(self, collection: Collection, entries: List[Dict[str, object]]) -> None:
        """Persist the full collection; failures are logged, never raised."""

        try:
            self.backend.set_item(collection.value, json.dumps(entries))
        except (StorageError, OSError) as error:
            LOGGER.error("Failed to persist '%s' (%s entries): %s", collection.value, len(entries), error)

    @staticmethod
    def _to_record(collection: Collection, entry: Mapping[str, object]) -> Optional[Record]:
        try:
            return record_from_dict(collection, entry)
        except (TypeError, ValueError) as error:
            LOGGER.error("Skipping malformed entry in '%s': %s", collection.value, error)
            return None

    def _next_id(self, entries: List[Dict[str, object]]) -> int:
        """Millisecond timestamp, bumped past the largest id already in use."""

        candidate = time.time_ns() // 1_000_000
        existing = [entry_id for entry_id in map(_entry_id, entries) if entry_id is not None]
        if existing and candidate <= max(existing):
            candidate = max(existing) + 1
        return candidate

    def list(self, collection: Collection) -> List[Record]:
        """Return the collection in insertion order as fresh record objects."""

        records = [
            record
            for record in (self._to_record(collection, entry) for entry in self._load(collection))
            if record is not None
        ]
        LOGGER.debug("Loaded %s records from '%s'", len(records), collection.value)
        return records

    def get_by_id(self, collection: Collection, record_id: int) -> Optional[Record]:
        """Return the record with ``record_id`` or ``None``."""

        for record in self.list(collection):
            if record.id == record_id:
                return record
        return None

    def create(self, collection: Collection, fields: Mapping[str, object]) -> Record:
        """Append a new record with a store-assigned id and persist it."""

        entries = self._load(collection)
        entry = coerce_fields({key: value for key, value in fields.items() if key != "id"})
        entry["id"] = self._next_id(entries)
        record = record_from_dict(collection, entry)
        entries.append(entry)
        self._save(collection, entries)
        LOGGER.info("Created record %s in '%s'", entry["id"], collection.value)
        return record

    def update(
        self, collection: Collection, record_id: int, partial_fields: Mapping[str, object]
    ) -> Optional[Record]:
        """Shallow-merge ``partial_fields`` over an existing record."""

        entries = self._load(collection)
        changes = coerce_fields({key: value for key, value in partial_fields.items() if key != "id"})
        for index, entry in enumerate(entries):
            if _entry_id(entry) == record_id:
                merged = {**entry, **changes}
                record = record_from_dict(collection, merged)
                entries[index] = merged
                self._save(collection, entries)
                LOGGER.info("Updated record %s in '%s'", record_id, collection.value)
                return record
        LOGGER.warning("Record %s not found in '%s'; update ignored", record_id, collection.value)
        return None

    def delete(self, collection: Collection, record_id: int) -> None:
        """Remove every record carrying ``record_id`` and persist the rest."""

        entries = self._load(collection)
        remaining = [entry for entry in entries if _entry_id(entry) != record_id]
        if len(remaining) == len(entries):
            LOGGER.warning("Record %s not found in '%s'; delete ignored", record_id, collection.value)
            return
        self._save(collection, remaining)
        LOGGER.info("Deleted record %s from '%s'", record_id, collection.value)

    def clear(self) -> List[str]:
        """Drop every stored collection and return the keys that were removed."""

        stored = set(self.backend.keys())
        removed: List[str] = []
        for collection in Collection:
            if collection.value not in stored:
                continue
            try:
                self.backend.remove_item(collection.value)
            except StorageError as error:
                LOGGER.error("Failed to remove '%s': %s", collection.value, error)
                continue
            removed.append(collection.value)
        LOGGER.info("Cleared collections: %s", ", ".join(removed) or "none")
        return removed

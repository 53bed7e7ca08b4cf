"""In-memory record store.

Notes:
- Per-process only: data is lost on restart.
- Thread-safe: a lock guards every collection.
- Records are deep-copied in and out, so callers never share mutable state
  with the store.
"""

from __future__ import annotations

import copy
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from storefront.adapters.store.base import (
    AbstractRecordStore,
    DuplicateRecordError,
    Record,
    RecordNotFoundError,
    RecordPage,
    new_record_id,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRecordStore(AbstractRecordStore):
    """Dict-backed store keyed by collection then record id."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._collections: dict[str, dict[str, Record]] = {}

    def _timestamp(self) -> str:
        return self._clock().isoformat()

    def _collection_locked(self, collection: str) -> dict[str, Record]:
        return self._collections.setdefault(collection, {})

    def _require_locked(self, collection: str, record_id: str) -> Record:
        record = self._collection_locked(collection).get(record_id)
        if record is None:
            raise RecordNotFoundError.for_record(collection, record_id)
        return record

    def create(self, collection: str, data: Mapping[str, Any]) -> Record:
        with self._lock:
            records = self._collection_locked(collection)
            record = copy.deepcopy(dict(data))
            record_id = record.get("id") or self._id_factory()
            if record_id in records:
                raise DuplicateRecordError.for_record(collection, record_id)

            now = self._timestamp()
            record["id"] = record_id
            record.setdefault("createdAt", now)
            record["updatedAt"] = now
            records[record_id] = record
            return copy.deepcopy(record)

    def get(self, collection: str, record_id: str) -> Record:
        with self._lock:
            return copy.deepcopy(self._require_locked(collection, record_id))

    def update(self, collection: str, record_id: str, data: Mapping[str, Any]) -> Record:
        with self._lock:
            record = self._require_locked(collection, record_id)
            changes = {k: v for k, v in copy.deepcopy(dict(data)).items() if k not in ("id", "createdAt")}
            record.update(changes)
            record["updatedAt"] = self._timestamp()
            return copy.deepcopy(record)

    def delete(self, collection: str, record_id: str) -> None:
        with self._lock:
            self._require_locked(collection, record_id)
            del self._collections[collection][record_id]

    def list(
        self,
        collection: str,
        *,
        filters: Mapping[str, Any] | None = None,
        search: str | None = None,
        search_fields: Iterable[str] = (),
        sort_by: str = "createdAt",
        order: str = "desc",
        offset: int = 0,
        limit: int | None = None,
    ) -> RecordPage:
        if order not in ("asc", "desc"):
            raise ValueError("order must be 'asc' or 'desc'")
        if offset < 0:
            raise ValueError("offset must be >= 0")

        active_filters = {k: v for k, v in (filters or {}).items() if v is not None}
        needle = search.casefold() if search else None
        fields = tuple(search_fields)

        with self._lock:
            candidates = list(self._collection_locked(collection).values())

            matches = [
                record
                for record in candidates
                if all(record.get(k) == v for k, v in active_filters.items())
                and (needle is None or _matches_search(record, needle, fields))
            ]

            # Records missing the sort field go last regardless of order
            present = [r for r in matches if r.get(sort_by) is not None]
            missing = [r for r in matches if r.get(sort_by) is None]
            present.sort(key=lambda r: r[sort_by], reverse=(order == "desc"))
            ordered = present + missing

            end = None if limit is None else offset + limit
            page = [copy.deepcopy(r) for r in ordered[offset:end]]
            return RecordPage(items=page, total=len(matches))

    def clear(self) -> None:
        with self._lock:
            self._collections.clear()


def _matches_search(record: Record, needle: str, fields: tuple[str, ...]) -> bool:
    for name in fields:
        value = record.get(name)
        if isinstance(value, str) and needle in value.casefold():
            return True
    return False

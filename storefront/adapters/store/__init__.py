"""Record store adapters.

Services depend on ``AbstractRecordStore`` only; the in-memory implementation
backs development and tests and can be replaced by a database-backed store.
"""

from __future__ import annotations

from storefront.adapters.store.base import (
    AbstractRecordStore,
    DuplicateRecordError,
    RecordNotFoundError,
    RecordPage,
    new_record_id,
)
from storefront.adapters.store.in_memory import InMemoryRecordStore

__all__ = [
    "AbstractRecordStore",
    "DuplicateRecordError",
    "InMemoryRecordStore",
    "RecordNotFoundError",
    "RecordPage",
    "new_record_id",
]

"""Record store interface.

A key-unique store of JSON-compatible records grouped in named collections,
with create/read/update/delete and a filtered, sorted, paginated list.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from storefront.core.errors import DomainAppError, NotFoundAppError

Record = dict[str, Any]


def new_record_id() -> str:
    """Return a collision-resistant id shaped like a cuid (``c`` + 32 hex chars)."""
    return f"c{uuid.uuid4().hex}"


class RecordNotFoundError(NotFoundAppError):
    """Raised when a record id does not exist in its collection."""

    @classmethod
    def for_record(cls, collection: str, record_id: str) -> "RecordNotFoundError":
        return cls(
            code="NOT_FOUND",
            message="Record not found",
            details={"collection": collection, "id": record_id},
        )


class DuplicateRecordError(DomainAppError):
    """Raised when creating a record whose id is already taken."""

    @classmethod
    def for_record(cls, collection: str, record_id: str) -> "DuplicateRecordError":
        return cls(
            code="CONFLICT",
            message="A record with this id already exists",
            details={"collection": collection, "id": record_id},
            http_status=409,
        )


@dataclass(frozen=True)
class RecordPage:
    """One page of a list query.

    Attributes:
        items: Records on this page.
        total: Number of records matching the filters across all pages.
    """

    items: list[Record] = field(default_factory=list)
    total: int = 0


class AbstractRecordStore(ABC):
    """Interface for record stores."""

    @abstractmethod
    def create(self, collection: str, data: Mapping[str, Any]) -> Record:
        """Insert a record, assigning ``id``/``createdAt``/``updatedAt``.

        Raises:
            DuplicateRecordError: If ``data`` carries an id already in use.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, collection: str, record_id: str) -> Record:
        """Return the record with ``record_id``.

        Raises:
            RecordNotFoundError: If no such record exists.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, collection: str, record_id: str, data: Mapping[str, Any]) -> Record:
        """Merge ``data`` into an existing record and return the result.

        Raises:
            RecordNotFoundError: If no such record exists.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> None:
        """Remove a record.

        Raises:
            RecordNotFoundError: If no such record exists.
        """
        raise NotImplementedError

    @abstractmethod
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
        """List records matching equality ``filters`` and a text ``search``.

        Args:
            collection: Collection name.
            filters: Field equality filters; ``None`` values are ignored.
            search: Case-insensitive substring matched against ``search_fields``.
            search_fields: Fields searched when ``search`` is set.
            sort_by: Field to sort on.
            order: ``asc`` or ``desc``.
            offset: Number of matching records to skip.
            limit: Maximum records returned (``None`` for all).

        Returns:
            RecordPage with the requested slice and the total match count.
        """
        raise NotImplementedError

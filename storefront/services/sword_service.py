"""Sword catalog queries and mutations."""

from __future__ import annotations

import math
from typing import Any

from storefront.adapters.store.base import AbstractRecordStore, RecordNotFoundError
from storefront.core.errors import NotFoundAppError
from storefront.schemas.sword import SwordListQuery, SwordUpdate
from storefront.services.catalog import SWORDS

SEARCH_FIELDS = ("name", "nameJapanese", "description")


def _sword_not_found() -> NotFoundAppError:
    return NotFoundAppError(code="NOT_FOUND", message="Sword not found")


class SwordService:
    def __init__(self, store: AbstractRecordStore) -> None:
        self._store = store

    def list_swords(self, query: SwordListQuery) -> dict[str, Any]:
        """Return one page of the catalog plus pagination metadata."""
        page = self._store.list(
            SWORDS,
            filters={"category": query.category},
            search=query.search,
            search_fields=SEARCH_FIELDS,
            sort_by=query.sort_by,
            order=query.order,
            offset=(query.page - 1) * query.limit,
            limit=query.limit,
        )
        return {
            "swords": page.items,
            "pagination": {
                "total": page.total,
                "pages": math.ceil(page.total / query.limit),
                "current": query.page,
                "limit": query.limit,
            },
        }

    def get_sword(self, sword_id: str) -> dict[str, Any]:
        try:
            return self._store.get(SWORDS, sword_id)
        except RecordNotFoundError:
            raise _sword_not_found() from None

    def update_sword(self, payload: SwordUpdate, sword_id: str) -> dict[str, Any]:
        """Replace the editable fields of an existing sword."""
        changes = payload.model_dump(by_alias=True, exclude_none=True)
        try:
            return self._store.update(SWORDS, sword_id, changes)
        except RecordNotFoundError:
            raise _sword_not_found() from None

    def delete_sword(self, sword_id: str) -> dict[str, str]:
        try:
            self._store.delete(SWORDS, sword_id)
        except RecordNotFoundError:
            raise _sword_not_found() from None
        return {"message": "Sword deleted successfully"}

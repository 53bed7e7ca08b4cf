"""Customer inquiry creation and listing."""

from __future__ import annotations

from typing import Any

from storefront.adapters.store.base import AbstractRecordStore, RecordNotFoundError
from storefront.core.errors import NotFoundAppError
from storefront.schemas.inquiry import InquiryCreate, InquiryListQuery
from storefront.services.catalog import INQUIRIES, SWORDS


class InquiryService:
    """Persist inquiries and resolve the sword each one refers to."""

    def __init__(self, store: AbstractRecordStore) -> None:
        self._store = store

    def _find_sword(self, sword_id: str | None) -> dict[str, Any] | None:
        if not sword_id:
            return None
        try:
            return self._store.get(SWORDS, sword_id)
        except RecordNotFoundError:
            return None

    def create_inquiry(self, payload: InquiryCreate) -> dict[str, Any]:
        """Store a new inquiry.

        Raises:
            NotFoundAppError: If ``swordId`` names a sword that does not exist.
        """
        sword = self._find_sword(payload.sword_id)
        if payload.sword_id and sword is None:
            raise NotFoundAppError(code="NOT_FOUND", message="Sword not found")

        record = self._store.create(
            INQUIRIES,
            {
                "userId": payload.user_id,
                "swordId": payload.sword_id,
                "interest": payload.interest,
                "message": payload.message,
                "status": "PENDING",
            },
        )
        return {**record, "sword": sword}

    def list_inquiries(self, query: InquiryListQuery) -> list[dict[str, Any]]:
        page = self._store.list(
            INQUIRIES,
            filters={"userId": query.user_id},
            sort_by="createdAt",
            order="desc",
        )
        # Inquiries outlive deleted swords; those resolve to null
        return [{**item, "sword": self._find_sword(item.get("swordId"))} for item in page.items]

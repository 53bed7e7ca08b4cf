"""Unit tests for the in-memory record store."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from storefront.adapters.store.base import DuplicateRecordError, RecordNotFoundError
from storefront.adapters.store.in_memory import InMemoryRecordStore


@pytest.fixture
def ticking_store() -> InMemoryRecordStore:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = count()
    return InMemoryRecordStore(clock=lambda: base + timedelta(seconds=next(ticks)))


def test_create_assigns_id_and_timestamps(ticking_store: InMemoryRecordStore) -> None:
    record = ticking_store.create("swords", {"name": "Kotetsu"})

    assert record["id"].startswith("c")
    assert record["createdAt"] == "2024-01-01T00:00:00+00:00"
    assert record["updatedAt"] == record["createdAt"]
    assert ticking_store.get("swords", record["id"]) == record


def test_create_rejects_duplicate_id(ticking_store: InMemoryRecordStore) -> None:
    ticking_store.create("swords", {"id": "cfixed0001", "name": "A"})

    with pytest.raises(DuplicateRecordError) as exc_info:
        ticking_store.create("swords", {"id": "cfixed0001", "name": "B"})

    assert exc_info.value.status_code == 409


def test_returned_records_are_copies(ticking_store: InMemoryRecordStore) -> None:
    record = ticking_store.create("swords", {"specifications": {"length": "70cm"}})
    record["specifications"]["length"] = "1cm"

    stored = ticking_store.get("swords", record["id"])
    assert stored["specifications"]["length"] == "70cm"


def test_update_keeps_id_and_created_at(ticking_store: InMemoryRecordStore) -> None:
    record = ticking_store.create("swords", {"name": "Old"})

    updated = ticking_store.update(
        "swords", record["id"], {"name": "New", "id": "cother0000", "createdAt": "x"}
    )

    assert updated["id"] == record["id"]
    assert updated["createdAt"] == record["createdAt"]
    assert updated["name"] == "New"
    assert updated["updatedAt"] > record["updatedAt"]


def test_missing_records_raise_not_found(ticking_store: InMemoryRecordStore) -> None:
    with pytest.raises(RecordNotFoundError):
        ticking_store.get("swords", "cmissing00")
    with pytest.raises(RecordNotFoundError):
        ticking_store.update("swords", "cmissing00", {})
    with pytest.raises(RecordNotFoundError):
        ticking_store.delete("swords", "cmissing00")


def test_delete_removes_record(ticking_store: InMemoryRecordStore) -> None:
    record = ticking_store.create("swords", {"name": "Gone"})

    ticking_store.delete("swords", record["id"])

    assert ticking_store.list("swords").total == 0


def test_list_filters_searches_sorts_and_paginates(ticking_store: InMemoryRecordStore) -> None:
    for name, category, price in [
        ("Dragon Katana", "KATANA", 300),
        ("Tiger Katana", "KATANA", 100),
        ("Dragon Tanto", "TANTO", 50),
        ("Crane Katana", "KATANA", 200),
    ]:
        ticking_store.create("swords", {"name": name, "category": category, "price": price})

    page = ticking_store.list(
        "swords",
        filters={"category": "KATANA", "available": None},
        sort_by="price",
        order="asc",
        offset=1,
        limit=1,
    )
    assert page.total == 3
    assert [r["name"] for r in page.items] == ["Crane Katana"]

    found = ticking_store.list("swords", search="dRaGoN", search_fields=("name",))
    assert [r["name"] for r in found.items] == ["Dragon Tanto", "Dragon Katana"]


def test_records_without_sort_field_go_last(ticking_store: InMemoryRecordStore) -> None:
    ticking_store.create("swords", {"name": "No price"})
    ticking_store.create("swords", {"name": "Cheap", "price": 1})

    for order in ("asc", "desc"):
        names = [r["name"] for r in ticking_store.list("swords", sort_by="price", order=order).items]
        assert names[-1] == "No price"


@pytest.mark.parametrize("kwargs", [{"order": "up"}, {"offset": -1}])
def test_list_rejects_bad_arguments(ticking_store: InMemoryRecordStore, kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ticking_store.list("swords", **kwargs)

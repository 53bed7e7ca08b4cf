"""Tests for catalog browsing and maintenance over HTTP."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from storefront.services.catalog import SWORDS


@pytest.fixture
def sword(store) -> dict:
    return next(s for s in store.list(SWORDS).items if s["category"] == "KATANA")


def _update(**overrides) -> dict:
    payload = {
        "name": "Masamune Katana",
        "nameJapanese": "正宗刀",
        "category": "KATANA",
        "price": 27500,
        "description": "A masterpiece from the legendary swordsmith Masamune.",
        "craftsman": "Masamune",
        "era": "Kamakura Period",
        "image": "https://cdn.example.org/swords/masamune.jpg",
        "specifications": {"steelType": "Tamahagane"},
        "available": False,
    }
    payload.update(overrides)
    return payload


def test_list_swords_with_pagination(client: TestClient):
    resp = client.get("/api/swords", params={"limit": 2, "page": 2})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["swords"]) == 1
    assert body["pagination"] == {"total": 3, "pages": 2, "current": 2, "limit": 2}


def test_list_swords_sorted_by_price(client: TestClient):
    resp = client.get("/api/swords", params={"sortBy": "price", "order": "asc"})

    prices = [s["price"] for s in resp.json()["swords"]]
    assert prices == sorted(prices)


def test_list_swords_filters_and_searches(client: TestClient):
    by_category = client.get("/api/swords", params={"category": "TANTO"}).json()
    assert [s["category"] for s in by_category["swords"]] == ["TANTO"]

    by_search = client.get("/api/swords", params={"search": "muramasa"}).json()
    assert [s["name"] for s in by_search["swords"]] == ["Muramasa Wakizashi"]


def test_list_swords_rejects_bad_query(client: TestClient):
    resp = client.get("/api/swords", params={"limit": 500})

    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["field"] == "limit"


def test_get_sword(client: TestClient, sword: dict):
    resp = client.get(f"/api/swords/{sword['id']}")

    assert resp.status_code == 200
    assert resp.json()["name"] == sword["name"]


def test_get_missing_sword_is_404(client: TestClient):
    resp = client.get("/api/swords/cmissing0000")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_update_sword(client: TestClient, sword: dict):
    resp = client.put(f"/api/swords/{sword['id']}", json=_update())

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == sword["id"]
    assert body["price"] == 27500
    assert body["available"] is False
    assert body["createdAt"] == sword["createdAt"]


def test_update_missing_sword_is_404(client: TestClient):
    resp = client.put("/api/swords/cmissing0000", json=_update())

    assert resp.status_code == 404


def test_update_is_validated_before_lookup(client: TestClient):
    resp = client.put("/api/swords/cmissing0000", json=_update(price="expensive"))

    assert resp.status_code == 400
    assert [d["field"] for d in resp.json()["error"]["details"]] == ["price"]


def test_overflowing_price_is_rejected_and_catalog_still_lists(
    client: TestClient, sword: dict
):
    body = json.dumps(_update()).replace('"price": 27500', '"price": 1e999')

    resp = client.put(
        f"/api/swords/{sword['id']}",
        content=body.encode(),
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert [d["field"] for d in resp.json()["error"]["details"]] == ["price"]
    assert client.get("/api/swords").status_code == 200
    assert client.get(f"/api/swords/{sword['id']}").json()["price"] == sword["price"]


def test_image_url_is_stored_as_submitted(client: TestClient, sword: dict):
    image = "https://cdn.example.org"

    resp = client.put(f"/api/swords/{sword['id']}", json=_update(image=image))

    assert resp.status_code == 200
    assert resp.json()["image"] == image


def test_delete_sword(client: TestClient, sword: dict):
    resp = client.delete(f"/api/swords/{sword['id']}")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Sword deleted successfully"}
    assert client.get(f"/api/swords/{sword['id']}").status_code == 404


def test_writes_are_rate_limited(client: TestClient, sword: dict):
    for _ in range(5):
        assert client.put(f"/api/swords/{sword['id']}", json=_update()).status_code == 200

    resp = client.delete(f"/api/swords/{sword['id']}")

    assert resp.status_code == 429
    assert client.get(f"/api/swords/{sword['id']}").status_code == 200


def test_unknown_route_uses_error_envelope(client: TestClient):
    resp = client.get("/api/katanas")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_wrong_method_uses_error_envelope(client: TestClient):
    resp = client.patch("/api/contact", json={})

    assert resp.status_code == 405
    assert resp.json()["error"]["code"] == "METHOD_NOT_ALLOWED"
    assert "POST" in resp.headers["Allow"]


def test_openapi_marks_rate_limited_writes(client: TestClient):
    schema = client.get("/openapi.json").json()

    contact = schema["paths"]["/api/contact"]["post"]
    assert contact["x-rate-limited"] is True
    assert "429" in contact["responses"]
    assert "x-rate-limited" not in schema["paths"]["/api/swords"]["get"]
    assert "ErrorEnvelope" in schema["components"]["schemas"]

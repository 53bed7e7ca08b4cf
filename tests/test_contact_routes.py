"""End-to-end tests for the contact endpoint through the FastAPI app."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient


def _post(client: TestClient, payload, ip: str | None = "1.2.3.4"):
    headers = {"X-Forwarded-For": ip} if ip is not None else {}
    return client.post("/api/contact", json=payload, headers=headers)


def test_contact_submission_succeeds(client: TestClient, valid_contact: dict):
    resp = _post(client, valid_contact)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Contact form submitted successfully"}
    assert resp.headers.get("X-Request-ID")


def test_sixth_submission_in_an_hour_is_rate_limited(client: TestClient, valid_contact: dict):
    statuses = [_post(client, valid_contact).status_code for _ in range(5)]
    assert statuses == [200] * 5

    resp = _post(client, valid_contact)

    assert resp.status_code == 429
    assert resp.json() == {
        "error": {
            "code": "RATE_LIMIT_EXCEEDED",
            "message": "Too many requests. Please try again later.",
        }
    }
    assert resp.headers["Retry-After"] == "3600"
    assert resp.headers["X-RateLimit-Remaining"] == "0"


def test_limit_resets_after_window(client: TestClient, clock, valid_contact: dict):
    for _ in range(5):
        _post(client, valid_contact)
    assert _post(client, valid_contact).status_code == 429

    clock.return_value += 3600
    assert _post(client, valid_contact).status_code == 200


def test_short_message_is_rejected_with_violation(client: TestClient):
    resp = _post(
        client,
        {
            "name": "Jo",
            "email": "jo@x.com",
            "message": "too short",
            "acceptTerms": True,
            "interest": "katana",
        },
    )

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert [d["field"] for d in error["details"]] == ["message"]


def test_malformed_json_is_a_validation_error(client: TestClient):
    resp = client.post(
        "/api/contact",
        content=b"{not json",
        headers={"Content-Type": "application/json", "X-Forwarded-For": "1.2.3.4"},
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["field"] == "body"


def test_internal_fault_returns_generic_error_and_logs_detail(
    app: FastAPI, client: TestClient, valid_contact: dict, caplog
):
    app.state.contact_service = AsyncMock()
    app.state.contact_service.submit.side_effect = RuntimeError("smtp relay refused connection")

    with caplog.at_level(logging.ERROR):
        resp = _post(client, valid_contact)

    assert resp.status_code == 500
    assert resp.json() == {
        "error": {"code": "INTERNAL_SERVER_ERROR", "message": "An unexpected error occurred"}
    }
    assert "smtp relay" not in resp.text
    records = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert any("smtp relay refused connection" in r.getMessage() for r in records)
    assert any(r.exc_info and r.exc_info[0] is RuntimeError for r in records)


def test_first_forwarded_address_is_the_client_key(client: TestClient, limiter, valid_contact):
    _post(client, valid_contact, ip=" 203.0.113.9 , 10.0.0.1")

    assert limiter.snapshot("203.0.113.9").count == 1


def test_clients_without_forwarded_address_share_a_bucket(
    client: TestClient, limiter, valid_contact: dict
):
    for _ in range(3):
        _post(client, valid_contact, ip=None)
    for _ in range(2):
        _post(client, valid_contact, ip="   ")

    assert limiter.snapshot("unknown").count == 5
    assert _post(client, valid_contact, ip=None).status_code == 429


def test_clients_are_limited_independently(client: TestClient, valid_contact: dict):
    for _ in range(5):
        _post(client, valid_contact, ip="1.1.1.1")

    assert _post(client, valid_contact, ip="1.1.1.1").status_code == 429
    assert _post(client, valid_contact, ip="2.2.2.2").status_code == 200


def test_contact_audit_log_omits_personal_data(client: TestClient, valid_contact: dict, caplog):
    with caplog.at_level(logging.INFO):
        _post(client, valid_contact)

    submitted = [r for r in caplog.records if r.getMessage() == "contact.submitted"]
    assert len(submitted) == 1
    record = submitted[0]
    assert record.email_domain == "iga-forge.com"
    assert record.has_phone is True
    assert not hasattr(record, "email")
    assert valid_contact["message"] not in str(record.__dict__)

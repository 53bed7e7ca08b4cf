"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
Environment variables are pinned here, before any import that builds
settings, so a developer's local .env file cannot change test behaviour.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "5")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_SECONDS", "3600")
os.environ.setdefault("APP_SEED_CATALOG", "true")
os.environ.setdefault("LOG_LEVEL", "INFO")

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from storefront.adapters.store.in_memory import InMemoryRecordStore
from storefront.core.app_factory import create_app
from storefront.services.catalog import seed_catalog


@pytest.fixture
def clock() -> Mock:
    """Controllable time source for the rate limiter."""
    return Mock(return_value=1_000_000.0)


@pytest.fixture
def limiter(clock: Mock) -> InMemoryFixedWindowRateLimiter:
    return InMemoryFixedWindowRateLimiter(limit=5, window_seconds=3600, clock=clock)


@pytest.fixture
def store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    seed_catalog(store)
    return store


@pytest.fixture
def app(limiter: InMemoryFixedWindowRateLimiter, store: InMemoryRecordStore) -> FastAPI:
    return create_app(limiter=limiter, store=store, configure_logs=False)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def valid_contact() -> dict:
    return {
        "name": "Hanzo Hattori",
        "email": "hanzo@iga-forge.com",
        "phone": "+819012345678",
        "interest": "katana",
        "message": "I would like to commission a katana.",
        "acceptTerms": True,
    }

"""Shared fixtures for the backend test suite."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from logging_config import null_logger
from main import create_app
from repo_entries import MemoryEntryStore
from service_entries import PainService

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store() -> MemoryEntryStore:
    """Fresh empty store for each test."""
    return MemoryEntryStore()


@pytest.fixture
def service(store: MemoryEntryStore) -> PainService:
    """Service over the `store` fixture with a no-op logger."""
    return PainService(store, logger=null_logger())


@pytest.fixture
def fixed_service(store: MemoryEntryStore) -> PainService:
    """Service whose clock always reads `FIXED_NOW`."""
    return PainService(store, logger=null_logger(), clock=lambda: FIXED_NOW)


@pytest.fixture
def client(store: MemoryEntryStore) -> TestClient:
    """Test client for an app wired to the `store` fixture."""
    return TestClient(create_app(store=store, logger=null_logger()))

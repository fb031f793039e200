"""Shared fixtures: fixed clock, fast locator settings, empty in-memory stores."""

from datetime import datetime, timezone

import pytest

from audit_readiness.config import Settings
from audit_readiness.persistence.memory_stores import (
    InMemoryDocumentStore,
    InMemoryFormStore,
    InMemoryMaintenanceStore,
)
from audit_readiness.persistence.score_repository import InMemoryScoreRepository
from audit_readiness.services.readiness_service import RecordStores

ORG = "org-test"
NOW = datetime(2025, 6, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def settings():
    return Settings(
        mock_mode=True,
        locator_timeout_seconds=0.5,
        locator_max_retries=1,
        locator_retry_backoff_seconds=0.0,
        _env_file=None,
    )


@pytest.fixture
def form_store():
    return InMemoryFormStore()


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def maintenance_store():
    return InMemoryMaintenanceStore()


@pytest.fixture
def stores(form_store, document_store, maintenance_store):
    return RecordStores(form_store, document_store, maintenance_store, InMemoryScoreRepository())

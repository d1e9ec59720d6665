"""Shared fixtures for storage and API tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from cycletrack.main import create_app
from cycletrack.services import storage
from cycletrack.services.storage import CycleTrackRepository, MemoryStore, get_repository


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repository(memory_store: MemoryStore) -> CycleTrackRepository:
    return CycleTrackRepository(memory_store)


@pytest.fixture
def client(repository: CycleTrackRepository, monkeypatch) -> Iterator[TestClient]:
    """API client backed by an in-memory store.  Lifespan hooks are not run."""
    monkeypatch.setattr(storage, "_repository", repository)
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()

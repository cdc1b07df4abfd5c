# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktrack.api import ServiceApi, build_api
from tasktrack.core.state import AppState
from tasktrack.storage.record_store import RecordStore

from .fakes import FakeBlobStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasktrack-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        blob_dir=tmp_path / "data" / "blobs",
        storage_key="typesafe_db",
        latency_ms=0,
        current_user_id="1",
    )


@pytest.fixture()
def blobs() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture()
def store(blobs: FakeBlobStore) -> RecordStore:
    """Zero-latency store over an empty blob store (starts from the seed)."""
    return RecordStore(blobs, latency=0)


@pytest.fixture()
def api(store: RecordStore) -> ServiceApi:
    return build_api(store)


@pytest.fixture()
def state(settings: SimpleNamespace, store: RecordStore, api: ServiceApi) -> AppState:
    return AppState(settings=settings, store=store, api=api, current_user_id="1")

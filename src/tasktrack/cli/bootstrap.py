# src/tasktrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the one RecordStore for the process and wires it into AppState.

Nothing else constructs a store; consumers receive it through AppState.
"""

from __future__ import annotations

import logging

from ..api import build_api
from ..config import get_settings
from ..core.state import AppState
from ..storage.blob_store import FileBlobStore
from ..storage.record_store import RecordStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.blob_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = RecordStore(
        FileBlobStore(settings.blob_dir),
        key=settings.storage_key,
        latency=settings.latency_ms / 1000.0,
    )
    logger.debug("Store wired blob_dir=%s key=%s", settings.blob_dir, settings.storage_key)

    return AppState(
        settings=settings,
        store=store,
        api=build_api(store),
        current_user_id=str(getattr(settings, "current_user_id", "1")),
    )

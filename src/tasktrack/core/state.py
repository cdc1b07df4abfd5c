# src/tasktrack/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..api import ServiceApi
from ..storage.record_store import RecordStore


@dataclass
class AppState:
    # Settings object (real Settings or a SimpleNamespace in tests).
    settings: object

    store: RecordStore
    api: ServiceApi

    current_user_id: str = "1"

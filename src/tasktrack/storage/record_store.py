# src/tasktrack/storage/record_store.py

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

from ..core.models import Task, TaskStatus, User
from ..core.ports import BlobStore
from .snapshot import STORAGE_KEY, Snapshot, SnapshotError, decode_snapshot, encode_snapshot, seed_snapshot

logger = logging.getLogger(__name__)

_UNSET: Any = object()

DEFAULT_LATENCY_SECONDS = 0.5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class RecordStore:
    """
    Task/user record store with write-through persistence.

    The whole snapshot lives in memory. It is read from the blob store once, at
    construction, and rewritten in full after every successful mutation.

    Every public coroutine first sleeps for `latency` seconds to mimic a remote
    backend. The sleep is a suspension point: other coroutines run meanwhile,
    and overlapping mutations are NOT serialized. Each mutation looks its record
    up again after the delay, and the blob ends up holding whatever the last
    writer saw.

    Load policy:
    - no blob        -> seed dataset (persisted by the first mutation)
    - malformed or undecodable blob -> WARNING + seed dataset (overwritten on next mutation)
    - OSError while reading -> propagates
    """

    def __init__(
        self,
        blob_store: BlobStore,
        *,
        key: str = STORAGE_KEY,
        latency: float = DEFAULT_LATENCY_SECONDS,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._blobs = blob_store
        self._key = key
        self._latency = max(0.0, float(latency))
        self._new_id = id_factory or _new_id
        self._clock = clock or _utcnow

        self._source = "blob"
        self._data = self._load()
        logger.info(
            "RecordStore ready key=%s source=%s tasks=%d users=%d",
            self._key,
            self._source,
            len(self._data.tasks),
            len(self._data.users),
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def latency(self) -> float:
        return self._latency

    @property
    def snapshot_source(self) -> str:
        """Where the initial snapshot came from: "blob", "seed" or "recovered"."""
        return self._source

    # ---- low-level helpers ----

    def _load(self) -> Snapshot:
        try:
            stored = self._blobs.read(self._key)
            if stored is None:
                self._source = "seed"
                return seed_snapshot(self._clock())
            return decode_snapshot(stored)
        except (SnapshotError, UnicodeDecodeError) as e:
            logger.warning(
                "Stored snapshot key=%s is malformed (%s); falling back to seed data.",
                self._key,
                e,
            )
            self._source = "recovered"
            return seed_snapshot(self._clock())

    def _save(self) -> None:
        self._blobs.write(self._key, encode_snapshot(self._data))

    async def _delay(self) -> None:
        await asyncio.sleep(self._latency)

    def _touch(self, previous: datetime) -> datetime:
        # updated_at must move forward even if the clock is coarse or stepped back.
        now = self._clock()
        if now <= previous:
            return previous + timedelta(microseconds=1)
        return now

    def _task_index(self, task_id: str) -> int:
        for i, t in enumerate(self._data.tasks):
            if t.id == task_id:
                return i
        return -1

    # ---- sync diagnostics ----

    def count_tasks(self) -> int:
        return len(self._data.tasks)

    def snapshot(self) -> Snapshot:
        return self._data.copy()

    # ---- public API ----

    async def list_tasks(self) -> list[Task]:
        await self._delay()
        return list(self._data.tasks)

    async def create_task(
        self,
        *,
        title: str,
        user_id: str,
        description: str = "",
        status: TaskStatus | str = TaskStatus.TODO,
    ) -> Task:
        parsed_status = TaskStatus.parse(status)
        await self._delay()

        now = self._clock()
        task = Task(
            id=self._new_id(),
            title=title,
            description=description,
            status=parsed_status,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        self._data.tasks.append(task)
        self._save()
        logger.debug("Task created id=%s status=%s user_id=%s", task.id, task.status.value, user_id)
        return task

    async def update_task(
        self,
        task_id: str,
        *,
        title: str = _UNSET,
        description: str = _UNSET,
        status: TaskStatus | str = _UNSET,
        user_id: str = _UNSET,
    ) -> Task | None:
        changes: dict[str, Any] = {}
        if title is not _UNSET:
            changes["title"] = title
        if description is not _UNSET:
            changes["description"] = description
        if status is not _UNSET:
            changes["status"] = TaskStatus.parse(status)
        if user_id is not _UNSET:
            changes["user_id"] = user_id

        await self._delay()

        idx = self._task_index(task_id)
        if idx == -1:
            logger.debug("Task update skipped: id=%s not found", task_id)
            return None

        current = self._data.tasks[idx]
        updated = replace(current, **changes, updated_at=self._touch(current.updated_at))
        self._data.tasks[idx] = updated
        self._save()
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return updated

    async def delete_task(self, task_id: str) -> bool:
        await self._delay()

        idx = self._task_index(task_id)
        if idx == -1:
            return False

        del self._data.tasks[idx]
        self._save()
        logger.debug("Task deleted id=%s", task_id)
        return True

    async def get_user(self, user_id: str) -> User | None:
        await self._delay()
        for u in self._data.users:
            if u.id == user_id:
                return u
        return None

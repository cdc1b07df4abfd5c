# src/tasktrack/storage/snapshot.py

"""
Snapshot codec.

The whole store state is persisted as one JSON document:

    {"tasks": [...], "users": [...]}

Keys are camelCase (userId, createdAt, updatedAt) and timestamps are ISO-8601,
which keeps blobs written by the browser version of the store readable.

decode_snapshot() is strict: anything that does not match the entity shape
raises SnapshotError instead of producing half-parsed records.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..core.models import Task, TaskStatus, User

STORAGE_KEY = "typesafe_db"


class SnapshotError(ValueError):
    """Stored payload cannot be decoded into a Snapshot."""


@dataclass(slots=True)
class Snapshot:
    tasks: list[Task] = field(default_factory=list)
    users: list[User] = field(default_factory=list)

    def copy(self) -> Snapshot:
        # Records are frozen, so copying the lists is enough.
        return Snapshot(tasks=list(self.tasks), users=list(self.users))


def seed_snapshot(now: datetime) -> Snapshot:
    """Default dataset installed when nothing has been persisted yet."""
    return Snapshot(
        tasks=[
            Task(
                id="1",
                title="Complete Module 1",
                description="Finish the TypeScript Fundamentals module",
                status=TaskStatus.TODO,
                user_id="1",
                created_at=now,
                updated_at=now,
            ),
            Task(
                id="2",
                title="Refactor API",
                description="Convert the API to use TypeScript",
                status=TaskStatus.IN_PROGRESS,
                user_id="1",
                created_at=now,
                updated_at=now,
            ),
        ],
        users=[
            User(
                id="1",
                email="user@example.com",
                name="Demo User",
                created_at=now,
                updated_at=now,
            ),
        ],
    )


# ---- encoding ----


def format_ts(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _task_to_dict(t: Task) -> dict[str, Any]:
    return {
        "id": t.id,
        "title": t.title,
        "description": t.description,
        "status": t.status.value,
        "userId": t.user_id,
        "createdAt": format_ts(t.created_at),
        "updatedAt": format_ts(t.updated_at),
    }


def _user_to_dict(u: User) -> dict[str, Any]:
    return {
        "id": u.id,
        "email": u.email,
        "name": u.name,
        "createdAt": format_ts(u.created_at),
        "updatedAt": format_ts(u.updated_at),
    }


def encode_snapshot(snapshot: Snapshot) -> str:
    data = {
        "tasks": [_task_to_dict(t) for t in snapshot.tasks],
        "users": [_user_to_dict(u) for u in snapshot.users],
    }
    return json.dumps(data, ensure_ascii=False)


# ---- decoding ----


def parse_ts(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise SnapshotError(f"timestamp must be a non-empty string, got {raw!r}")
    try:
        ts = datetime.fromisoformat(raw.strip())
        # Naive values are treated as UTC.
        if ts.tzinfo is None:
            return ts.replace(tzinfo=timezone.utc)
        return ts.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        # OverflowError: in range locally but not once shifted to UTC.
        raise SnapshotError(f"invalid timestamp {raw!r}") from e


def _require_str(item: Mapping[str, Any], key: str, where: str) -> str:
    val = item.get(key)
    if not isinstance(val, str):
        raise SnapshotError(f"{where}: field {key!r} must be a string")
    return val


def _task_from_dict(item: Any, idx: int) -> Task:
    where = f"tasks[{idx}]"
    if not isinstance(item, Mapping):
        raise SnapshotError(f"{where}: expected an object")
    try:
        status = TaskStatus(item.get("status"))
    except ValueError:
        raise SnapshotError(f"{where}: unknown status {item.get('status')!r}") from None
    return Task(
        id=_require_str(item, "id", where),
        title=_require_str(item, "title", where),
        description=_require_str(item, "description", where),
        status=status,
        user_id=_require_str(item, "userId", where),
        created_at=parse_ts(item.get("createdAt")),
        updated_at=parse_ts(item.get("updatedAt")),
    )


def _user_from_dict(item: Any, idx: int) -> User:
    where = f"users[{idx}]"
    if not isinstance(item, Mapping):
        raise SnapshotError(f"{where}: expected an object")
    return User(
        id=_require_str(item, "id", where),
        email=_require_str(item, "email", where),
        name=_require_str(item, "name", where),
        created_at=parse_ts(item.get("createdAt")),
        updated_at=parse_ts(item.get("updatedAt")),
    )


def _check_unique(ids: list[str], what: str) -> None:
    seen: set[str] = set()
    for rid in ids:
        if rid in seen:
            raise SnapshotError(f"duplicate {what} id {rid!r}")
        seen.add(rid)


def decode_snapshot(raw: str) -> Snapshot:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise SnapshotError(f"payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError("payload must be a JSON object")

    raw_tasks = data.get("tasks")
    raw_users = data.get("users")
    if not isinstance(raw_tasks, list) or not isinstance(raw_users, list):
        raise SnapshotError("payload must contain 'tasks' and 'users' arrays")

    tasks = [_task_from_dict(item, i) for i, item in enumerate(raw_tasks)]
    users = [_user_from_dict(item, i) for i, item in enumerate(raw_users)]

    _check_unique([t.id for t in tasks], "task")
    _check_unique([u.id for u in users], "user")

    return Snapshot(tasks=tasks, users=users)

# tests/test_api.py

from __future__ import annotations

import pytest

from tasktrack.api import ServiceApi, build_api
from tasktrack.core.models import Task, TaskStatus, User


class RecordingRepo:
    """TaskRepo that records calls and returns canned values."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple, dict]] = []

    async def list_tasks(self) -> list[Task]:
        self.calls.append(("list_tasks", (), {}))
        return []

    async def create_task(self, **fields):
        self.calls.append(("create_task", (), fields))
        return "created"

    async def update_task(self, task_id, **changes):
        self.calls.append(("update_task", (task_id,), changes))
        return None

    async def delete_task(self, task_id):
        self.calls.append(("delete_task", (task_id,), {}))
        return False

    async def get_user(self, user_id):
        self.calls.append(("get_user", (user_id,), {}))
        return None


@pytest.mark.asyncio
async def test_facade_forwards_calls_unchanged() -> None:
    repo = RecordingRepo()
    api = build_api(repo)

    await api.tasks.list()
    assert await api.tasks.create(title="t", user_id="u", status="whatever") == "created"
    await api.tasks.update("7", title="x")
    await api.tasks.delete("7")
    await api.users.get("9")

    assert repo.calls == [
        ("list_tasks", (), {}),
        ("create_task", (), {"title": "t", "user_id": "u", "status": "whatever"}),
        ("update_task", ("7",), {"title": "x"}),
        ("delete_task", ("7",), {}),
        ("get_user", ("9",), {}),
    ]


@pytest.mark.asyncio
async def test_facade_over_record_store(api: ServiceApi) -> None:
    task = await api.tasks.create(title="Ship it", description="", status=TaskStatus.TODO, user_id="1")
    assert isinstance(task, Task)

    updated = await api.tasks.update(task.id, status="DONE")
    assert updated is not None and updated.status == TaskStatus.DONE

    assert await api.tasks.update("missing", title="x") is None
    assert await api.tasks.delete(task.id) is True
    assert await api.tasks.delete(task.id) is False

    user = await api.users.get("1")
    assert isinstance(user, User)
    assert await api.users.get("999") is None
    assert [t.id for t in await api.tasks.list()] == ["1", "2"]


def test_record_store_matches_task_repo_update_signature() -> None:
    import inspect

    from tasktrack.core.ports import TaskRepo
    from tasktrack.storage.record_store import RecordStore

    def kwonly(fn) -> dict[str, object]:
        return {
            name: p.annotation
            for name, p in inspect.signature(fn).parameters.items()
            if p.kind is inspect.Parameter.KEYWORD_ONLY
        }

    assert kwonly(TaskRepo.update_task) == kwonly(RecordStore.update_task)
    assert set(kwonly(RecordStore.update_task)) == {"title", "description", "status", "user_id"}

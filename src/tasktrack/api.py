# src/tasktrack/api.py

"""
Service facade.

A fixed, namespaced surface (api.tasks.*, api.users.*) over the record store.
Calls are forwarded as-is: no validation, no transformation, no batching.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .core.models import Task, User
from .core.ports import TaskRepo


@dataclass(frozen=True, slots=True)
class TasksApi:
    repo: TaskRepo

    async def list(self) -> list[Task]:
        return await self.repo.list_tasks()

    async def create(self, **fields: Any) -> Task:
        return await self.repo.create_task(**fields)

    async def update(self, task_id: str, **changes: Any) -> Task | None:
        return await self.repo.update_task(task_id, **changes)

    async def delete(self, task_id: str) -> bool:
        return await self.repo.delete_task(task_id)


@dataclass(frozen=True, slots=True)
class UsersApi:
    repo: TaskRepo

    async def get(self, user_id: str) -> User | None:
        return await self.repo.get_user(user_id)


@dataclass(frozen=True, slots=True)
class ServiceApi:
    tasks: TasksApi
    users: UsersApi


def build_api(repo: TaskRepo) -> ServiceApi:
    return ServiceApi(tasks=TasksApi(repo), users=UsersApi(repo))

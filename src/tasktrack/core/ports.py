# src/tasktrack/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the store and the facade.

The record store depends on a BlobStore Protocol instead of a concrete backend,
and the facade depends on TaskRepo. Both stay swappable for tests.
"""

from typing import Protocol

from .models import Task, TaskStatus, User


class BlobStore(Protocol):
    """
    Durable key -> string storage that survives restarts.

    read() returns None when nothing is stored under the key.
    """

    def read(self, key: str) -> str | None: ...
    def write(self, key: str, value: str) -> None: ...


class TaskRepo(Protocol):
    async def list_tasks(self) -> list[Task]: ...

    async def create_task(
            self,
            *,
            title: str,
            user_id: str,
            description: str = "",
            status: TaskStatus | str = TaskStatus.TODO,
    ) -> Task: ...

    # Omitted fields are left unchanged; id and created_at are not updatable.
    async def update_task(
            self,
            task_id: str,
            *,
            title: str = ...,
            description: str = ...,
            status: TaskStatus | str = ...,
            user_id: str = ...,
    ) -> Task | None: ...
    async def delete_task(self, task_id: str) -> bool: ...
    async def get_user(self, user_id: str) -> User | None: ...

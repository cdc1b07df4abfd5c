# src/tasktrack/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are stored verbatim in the snapshot blob."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, raw: TaskStatus | str) -> TaskStatus:
        """
        Accept an enum member or its value; names are matched case-insensitively
        so console input like "in_progress" works.
        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"unknown task status {raw!r} (expected one of: {allowed})") from None


@dataclass(frozen=True, slots=True)
class User:
    id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus
    user_id: str  # not checked against users

    created_at: datetime
    updated_at: datetime

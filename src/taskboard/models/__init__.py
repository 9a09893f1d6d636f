"""Persistent models for users, projects and tasks."""

from __future__ import annotations

from .common import TimestampMixin, utcnow
from .project import Project
from .task import CLEARABLE_TASK_FIELDS, Task, TaskPriority, TaskStatus
from .user import User

__all__ = [
    "CLEARABLE_TASK_FIELDS",
    "Project",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TimestampMixin",
    "User",
    "utcnow",
]

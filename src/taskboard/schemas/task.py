"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator, model_validator

from ..models import CLEARABLE_TASK_FIELDS, TaskPriority, TaskStatus
from .base import CamelModel
from .user import UserSummary


class TaskCreate(CamelModel):
    """Payload for creating a new task at the end of its column."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Write release notes",
                "projectId": "3f1c2d4e-5b6a-4c7d-8e9f-0a1b2c3d4e5f",
                "status": TaskStatus.TODO.value,
                "priority": TaskPriority.HIGH.value,
            }
        }
    )

    title: str = Field(min_length=1, max_length=200)
    project_id: UUID
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_id: UUID | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Title must not be blank")
        return stripped


class TaskUpdate(CamelModel):
    """Partial update; absent keys are left untouched."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"status": TaskStatus.IN_PROGRESS.value, "position": 0},
        }
    )

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    position: int | None = Field(default=None, ge=0)
    assignee_id: UUID | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str | None) -> str | None:
        if value is None:
            return value
        stripped = value.strip()
        if not stripped:
            raise ValueError("Title must not be blank")
        return stripped

    @model_validator(mode="after")
    def _check_fields(self) -> "TaskUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        for name in self.model_fields_set - CLEARABLE_TASK_FIELDS:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually sent."""

        return self.model_dump(exclude_unset=True)


class TaskRead(CamelModel):
    """Public representation of a task with its assignee resolved."""

    id: UUID
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    position: int
    due_date: datetime | None = None
    project_id: UUID
    assignee_id: UUID | None = None
    assignee: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]

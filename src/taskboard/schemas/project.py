"""Project-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel


class TaskCountsRead(CamelModel):
    """Per-status task totals derived from live task rows."""

    total: int = Field(default=0, ge=0)
    todo: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)
    done: int = Field(default=0, ge=0)


class ProjectCreate(CamelModel):
    """Payload for creating a new project."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Sprint 1", "description": "Two week iteration"},
        }
    )

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Name must not be blank")
        return stripped


class ProjectRead(CamelModel):
    """Public representation of a project with its derived task counts."""

    id: UUID
    name: str
    description: str | None = None
    owner_id: UUID
    task_counts: TaskCountsRead
    created_at: datetime
    updated_at: datetime


__all__ = ["ProjectCreate", "ProjectRead", "TaskCountsRead"]

"""Task table and its enumerations."""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlmodel import Field, Relationship

from .common import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .project import Project
    from .user import User


class TaskStatus(str, Enum):
    """Kanban columns, listed in board display order."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# Optional columns a partial update may set to null.
CLEARABLE_TASK_FIELDS = frozenset({"description", "assignee_id", "due_date"})


class Task(TimestampMixin, table=True):
    """A card in one column of one project.

    ``position`` is the card's index within its ``(project_id, status)`` column.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        sa.CheckConstraint("length(title) > 0", name="ck_tasks_title_length"),
        sa.CheckConstraint("position >= 0", name="ck_tasks_position_non_negative"),
        sa.Index("ix_tasks_project_id_status_position", "project_id", "status", "position"),
        sa.Index("ix_tasks_assignee_id", "assignee_id"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(
        max_length=200,
        sa_column=sa.Column(sa.String(length=200), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(length=1000), nullable=True),
    )
    status: TaskStatus = Field(
        default=TaskStatus.TODO,
        sa_column=sa.Column(
            sa.Enum(TaskStatus, name="task_status", native_enum=False, validate_strings=True),
            nullable=False,
            server_default=TaskStatus.TODO.value,
        ),
    )
    priority: TaskPriority = Field(
        default=TaskPriority.MEDIUM,
        sa_column=sa.Column(
            sa.Enum(TaskPriority, name="task_priority", native_enum=False, validate_strings=True),
            nullable=False,
            server_default=TaskPriority.MEDIUM.value,
        ),
    )
    position: int = Field(
        default=0,
        sa_column=sa.Column(sa.Integer(), nullable=False, server_default="0"),
    )
    due_date: datetime | None = Field(
        default=None,
        sa_column=sa.Column(sa.DateTime(timezone=True), nullable=True),
    )
    project_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    assignee_id: uuid.UUID | None = Field(
        default=None,
        sa_column=sa.Column(
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )

    project: Optional["Project"] = Relationship(back_populates="tasks")
    assignee: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Task.assignee_id]", "lazy": "selectin"},
    )


__all__ = ["CLEARABLE_TASK_FIELDS", "Task", "TaskPriority", "TaskStatus"]

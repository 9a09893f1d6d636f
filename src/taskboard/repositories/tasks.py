"""Repository for interacting with task persistence models."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from ..models import Task, TaskStatus
from .base import BaseRepository


def _column_order():
    return (Task.position.asc(), Task.created_at.desc(), Task.id.asc())


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    model = Task

    async def get_project_id(self, task_id: UUID) -> UUID | None:
        """Return the parent project of a task without loading the task itself."""
        result = await self.session.exec(select(Task.project_id).where(Task.id == task_id))
        return result.first()

    async def get_fresh(self, task_id: UUID) -> Task | None:
        """Load a task, overwriting any stale copy held in the identity map."""
        result = await self.session.exec(
            select(Task).where(Task.id == task_id).execution_options(populate_existing=True)
        )
        return result.first()

    async def list_column(self, project_id: UUID, status: TaskStatus) -> list[Task]:
        """Return one column in display order: position, then newest first."""
        result = await self.session.exec(
            select(Task)
            .where(Task.project_id == project_id, Task.status == status)
            .order_by(*_column_order())
            .execution_options(populate_existing=True)
        )
        return list(result.all())

    async def count_column(self, project_id: UUID, status: TaskStatus) -> int:
        result = await self.session.exec(
            select(func.count(Task.id)).where(Task.project_id == project_id, Task.status == status)
        )
        return int(result.one())

    async def list_for_project(self, project_id: UUID) -> list[Task]:
        """Return every task of a project with assignees loaded."""
        result = await self.session.exec(
            select(Task).where(Task.project_id == project_id).order_by(*_column_order())
        )
        return list(result.all())

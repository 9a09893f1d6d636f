"""Repository for project rows and their per-status task aggregation."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from ..models import Project, Task, TaskStatus
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Concrete repository encapsulating ``Project`` persistence operations."""

    model = Project

    async def get_for_update(self, project_id: UUID) -> Project | None:
        """Load a project and lock its row until the transaction ends.

        SQLite ignores ``FOR UPDATE``; callers still serialise through the keyed lock.
        """
        result = await self.session.exec(
            select(Project)
            .where(Project.id == project_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.first()

    async def list_for_owner(self, owner_id: UUID) -> list[Project]:
        """Return the owner's projects, newest first."""
        result = await self.session.exec(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc(), Project.id)
        )
        return list(result.all())

    async def count_tasks_by_status(
        self,
        project_ids: Sequence[UUID],
    ) -> dict[UUID, dict[TaskStatus, int]]:
        """Aggregate live task rows per project and status with one ``GROUP BY``."""
        if not project_ids:
            return {}
        result = await self.session.exec(
            select(Task.project_id, Task.status, func.count(Task.id))
            .where(Task.project_id.in_(project_ids))
            .group_by(Task.project_id, Task.status)
        )
        counts: dict[UUID, dict[TaskStatus, int]] = {}
        for project_id, status, total in result.all():
            counts.setdefault(project_id, {})[TaskStatus(status)] = int(total)
        return counts

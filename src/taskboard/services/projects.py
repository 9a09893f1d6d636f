"""Project listing, lookup and creation."""

from __future__ import annotations

import logging
from uuid import UUID

from ..db import SessionFactory, session_scope
from ..models import Project
from ..repositories import ProjectRepository
from .access import ProjectAccessGuard, ProjectSummary, TaskCounts
from .results import ServiceResult

logger = logging.getLogger(__name__)


class ProjectService:
    """Business logic for projects owned by a principal."""

    def __init__(self, session_factory: SessionFactory, *, guard: ProjectAccessGuard) -> None:
        self._session_factory = session_factory
        self._guard = guard

    async def list_projects(self, principal_id: UUID) -> ServiceResult[list[ProjectSummary]]:
        """Return the principal's projects, newest first, each with live task counts."""

        async with self._session_factory() as session:
            projects = ProjectRepository(session)
            owned = await projects.list_for_owner(principal_id)
            counts = await projects.count_tasks_by_status([project.id for project in owned])
        return ServiceResult.ok(
            [
                ProjectSummary(project=project, counts=TaskCounts.from_status_counts(counts.get(project.id)))
                for project in owned
            ]
        )

    async def get_project(self, project_id: UUID, principal_id: UUID) -> ServiceResult[ProjectSummary]:
        async with self._session_factory() as session:
            return await self._guard.get_owned_project(session, project_id, principal_id)

    async def create_project(
        self,
        principal_id: UUID,
        *,
        name: str,
        description: str | None = None,
    ) -> ServiceResult[ProjectSummary]:
        async with session_scope(self._session_factory) as session:
            project = await ProjectRepository(session).add(
                Project(name=name, description=description, owner_id=principal_id)
            )
        logger.info(
            "Project created",
            extra={"project_id": str(project.id), "owner_id": str(principal_id)},
        )
        return ServiceResult.ok(ProjectSummary(project=project, counts=TaskCounts()))


__all__ = ["ProjectService"]

"""Ownership guard: the one place that decides whether a principal may touch a project."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Project, TaskStatus
from ..repositories import ProjectRepository
from .results import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found"
PROJECT_FORBIDDEN = "You do not have access to this project"


@dataclass(slots=True)
class TaskCounts:
    """Per-status totals computed from live task rows."""

    todo: int = 0
    in_progress: int = 0
    done: int = 0

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.done

    @classmethod
    def from_status_counts(cls, counts: dict[TaskStatus, int] | None) -> "TaskCounts":
        counts = counts or {}
        return cls(
            todo=counts.get(TaskStatus.TODO, 0),
            in_progress=counts.get(TaskStatus.IN_PROGRESS, 0),
            done=counts.get(TaskStatus.DONE, 0),
        )


@dataclass(slots=True)
class ProjectSummary:
    """A project together with its derived task counts."""

    project: Project
    counts: TaskCounts = field(default_factory=TaskCounts)


class ProjectAccessGuard:
    """Load a project and assert that ``principal_id`` owns it.

    Tasks are never owned directly; task operations resolve the parent
    project and come through here as well.
    """

    async def get_owned_project(
        self,
        session: AsyncSession,
        project_id: UUID,
        principal_id: UUID,
        *,
        lock: bool = False,
        with_counts: bool = True,
    ) -> ServiceResult[ProjectSummary]:
        """Resolve an owned project.

        Callers that only gate a task operation pass ``with_counts=False`` and
        get zeroed counts without the aggregate query.
        """
        projects = ProjectRepository(session)
        project = await (projects.get_for_update(project_id) if lock else projects.get(project_id))
        if project is None:
            return ServiceResult.failure(ServiceError.not_found(PROJECT_NOT_FOUND))
        if project.owner_id != principal_id:
            logger.warning(
                "Project access denied",
                extra={"project_id": str(project_id), "owner_id": str(project.owner_id)},
            )
            return ServiceResult.failure(ServiceError.forbidden(PROJECT_FORBIDDEN))
        if not with_counts:
            return ServiceResult.ok(ProjectSummary(project=project))
        counts = await projects.count_tasks_by_status([project.id])
        return ServiceResult.ok(
            ProjectSummary(project=project, counts=TaskCounts.from_status_counts(counts.get(project.id)))
        )


__all__ = [
    "PROJECT_FORBIDDEN",
    "PROJECT_NOT_FOUND",
    "ProjectAccessGuard",
    "ProjectSummary",
    "TaskCounts",
]

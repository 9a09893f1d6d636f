"""Task operations composed from the access guard and the ordering engine.

Every mutation of a project's tasks runs under that project's keyed lock and
inside a single transaction that also holds the project row lock, so column
renumbering is serialised and all-or-nothing.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.locks import KeyedLock
from ..db import SessionFactory
from ..models import CLEARABLE_TASK_FIELDS, Task, TaskPriority, TaskStatus
from ..repositories import TaskRepository, UserRepository
from .access import ProjectAccessGuard, ProjectSummary
from .ordering import TaskOrderingEngine, order_board
from .results import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"
ASSIGNEE_NOT_FOUND = "Assignee does not exist"

UPDATABLE_FIELDS = frozenset(
    {"title", "description", "status", "priority", "position", "assignee_id", "due_date"}
)


def _check_changes(changes: Mapping[str, Any]) -> ServiceError | None:
    if not changes:
        return ServiceError.validation("At least one field must be provided for update")
    unknown = sorted(set(changes) - UPDATABLE_FIELDS)
    if unknown:
        return ServiceError.validation(f"Unknown task field: {unknown[0]}")
    for name, value in changes.items():
        if value is None and name not in CLEARABLE_TASK_FIELDS:
            return ServiceError.validation(f"{name} cannot be null")
    position = changes.get("position")
    if position is not None and position < 0:
        return ServiceError.validation("position must be greater than or equal to 0")
    return None


class TaskService:
    """Public task operations for an authenticated principal."""

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        guard: ProjectAccessGuard,
        ordering: TaskOrderingEngine,
        locks: KeyedLock,
    ) -> None:
        self._session_factory = session_factory
        self._guard = guard
        self._ordering = ordering
        self._locks = locks

    @asynccontextmanager
    async def _project_transaction(self, project_id: UUID) -> AsyncIterator[AsyncSession]:
        async with self._locks.hold(project_id):
            async with self._session_factory() as session:
                try:
                    yield session
                except BaseException:
                    await session.rollback()
                    raise

    async def _gate(
        self, session: AsyncSession, project_id: UUID, principal_id: UUID, *, lock: bool = True
    ) -> ServiceResult[ProjectSummary]:
        return await self._guard.get_owned_project(
            session, project_id, principal_id, lock=lock, with_counts=False
        )

    async def _resolve_project_id(self, task_id: UUID) -> UUID | None:
        async with self._session_factory() as session:
            return await TaskRepository(session).get_project_id(task_id)

    async def list_tasks(self, project_id: UUID, principal_id: UUID) -> ServiceResult[list[Task]]:
        """Return the board: TODO, IN_PROGRESS, DONE, each column in position order."""

        async with self._session_factory() as session:
            guarded = await self._gate(session, project_id, principal_id, lock=False)
            if not guarded.is_ok:
                return guarded.cast()
            tasks = await TaskRepository(session).list_for_project(project_id)
        return ServiceResult.ok(order_board(tasks))

    async def create_task(
        self,
        principal_id: UUID,
        *,
        project_id: UUID,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        assignee_id: UUID | None = None,
        due_date: datetime | None = None,
    ) -> ServiceResult[Task]:
        """Create a task at the end of its column."""

        async with self._project_transaction(project_id) as session:
            guarded = await self._gate(session, project_id, principal_id)
            if not guarded.is_ok:
                return guarded.cast()
            if assignee_id is not None and not await UserRepository(session).exists(assignee_id):
                return ServiceResult.failure(ServiceError.validation(ASSIGNEE_NOT_FOUND))

            tasks = TaskRepository(session)
            task = await tasks.add(
                Task(
                    title=title,
                    description=description,
                    status=status,
                    priority=priority,
                    position=await self._ordering.append_position(session, project_id, status),
                    project_id=project_id,
                    assignee_id=assignee_id,
                    due_date=due_date,
                )
            )
            await session.commit()
            logger.info(
                "Task created",
                extra={
                    "task_id": str(task.id),
                    "project_id": str(project_id),
                    "status": task.status.value,
                    "position": task.position,
                },
            )
            created = await tasks.get_fresh(task.id)
        return ServiceResult.ok(created)

    async def update_task(
        self,
        task_id: UUID,
        principal_id: UUID,
        changes: Mapping[str, Any],
    ) -> ServiceResult[Task]:
        """Apply a partial update.

        ``changes`` holds only the fields the caller sent. A ``status`` and/or
        ``position`` change is routed through the ordering engine: the same
        status with a position reorders in place, a new status with a position
        inserts at that index and a new status alone appends to the destination.
        """

        problem = _check_changes(changes)
        if problem is not None:
            return ServiceResult.failure(problem)

        project_id = await self._resolve_project_id(task_id)
        if project_id is None:
            return ServiceResult.failure(ServiceError.not_found(TASK_NOT_FOUND))

        async with self._project_transaction(project_id) as session:
            guarded = await self._gate(session, project_id, principal_id)
            if not guarded.is_ok:
                return guarded.cast()
            tasks = TaskRepository(session)
            task = await tasks.get_fresh(task_id)
            if task is None:
                return ServiceResult.failure(ServiceError.not_found(TASK_NOT_FOUND))

            assignee_id = changes.get("assignee_id")
            if assignee_id is not None and not await UserRepository(session).exists(assignee_id):
                return ServiceResult.failure(ServiceError.validation(ASSIGNEE_NOT_FOUND))

            if "status" in changes or "position" in changes:
                from_status = task.status
                from_position = task.position
                target = TaskStatus(changes.get("status", task.status))
                await self._ordering.place(session, task, status=target, index=changes.get("position"))
                logger.info(
                    "Task moved",
                    extra={
                        "task_id": str(task.id),
                        "project_id": str(project_id),
                        "from_status": TaskStatus(from_status).value,
                        "from_position": from_position,
                        "to_status": target.value,
                        "to_position": task.position,
                    },
                )

            for name in ("title", "description", "priority", "assignee_id", "due_date"):
                if name in changes:
                    setattr(task, name, changes[name])

            await session.commit()
            updated = await tasks.get_fresh(task_id)
        return ServiceResult.ok(updated)

    async def delete_task(self, task_id: UUID, principal_id: UUID) -> ServiceResult[None]:
        """Delete a task and close the gap it leaves in its column."""

        project_id = await self._resolve_project_id(task_id)
        if project_id is None:
            return ServiceResult.failure(ServiceError.not_found(TASK_NOT_FOUND))

        async with self._project_transaction(project_id) as session:
            guarded = await self._gate(session, project_id, principal_id)
            if not guarded.is_ok:
                return guarded.cast()
            tasks = TaskRepository(session)
            task = await tasks.get_fresh(task_id)
            if task is None:
                return ServiceResult.failure(ServiceError.not_found(TASK_NOT_FOUND))
            await tasks.delete(task)
            await self._ordering.close_gap(session, task)
            await session.commit()
        logger.info(
            "Task deleted",
            extra={"task_id": str(task_id), "project_id": str(project_id)},
        )
        return ServiceResult.ok(None)


__all__ = ["ASSIGNEE_NOT_FOUND", "TASK_NOT_FOUND", "TaskService"]

"""Task mutation routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Response, status

from ...deps import CurrentPrincipalDependency, TaskServiceDependency
from ...schemas import ApiResponse, TaskCreate, TaskRead, TaskUpdate, envelope

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "",
    response_model=ApiResponse[TaskRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a task at the end of its column",
)
async def create_task(
    payload: TaskCreate,
    principal: CurrentPrincipalDependency,
    tasks: TaskServiceDependency,
) -> ApiResponse[TaskRead]:
    task = (
        await tasks.create_task(
            principal.user_id,
            project_id=payload.project_id,
            title=payload.title,
            description=payload.description,
            status=payload.status,
            priority=payload.priority,
            assignee_id=payload.assignee_id,
            due_date=payload.due_date,
        )
    ).unwrap()
    return envelope(TaskRead.model_validate(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskRead], summary="Partially update a task")
async def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    principal: CurrentPrincipalDependency,
    tasks: TaskServiceDependency,
) -> ApiResponse[TaskRead]:
    task = (await tasks.update_task(task_id, principal.user_id, payload.changes())).unwrap()
    return envelope(TaskRead.model_validate(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a task",
)
async def delete_task(
    task_id: UUID,
    principal: CurrentPrincipalDependency,
    tasks: TaskServiceDependency,
) -> Response:
    (await tasks.delete_task(task_id, principal.user_id)).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

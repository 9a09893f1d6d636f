"""Project routes, including the project board listing."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status

from ...deps import CurrentPrincipalDependency, ProjectServiceDependency, TaskServiceDependency
from ...schemas import ApiResponse, ProjectCreate, ProjectRead, TaskCountsRead, TaskRead, envelope
from ...services import ProjectSummary

router = APIRouter(prefix="/projects", tags=["projects"])


def project_read(summary: ProjectSummary) -> ProjectRead:
    project = summary.project
    return ProjectRead(
        id=project.id,
        name=project.name,
        description=project.description,
        owner_id=project.owner_id,
        task_counts=TaskCountsRead.model_validate(summary.counts),
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


@router.get("", response_model=ApiResponse[list[ProjectRead]], summary="List owned projects")
async def list_projects(
    principal: CurrentPrincipalDependency,
    projects: ProjectServiceDependency,
) -> ApiResponse[list[ProjectRead]]:
    summaries = (await projects.list_projects(principal.user_id)).unwrap()
    return envelope([project_read(summary) for summary in summaries])


@router.post(
    "",
    response_model=ApiResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    payload: ProjectCreate,
    principal: CurrentPrincipalDependency,
    projects: ProjectServiceDependency,
) -> ApiResponse[ProjectRead]:
    summary = (
        await projects.create_project(
            principal.user_id,
            name=payload.name,
            description=payload.description,
        )
    ).unwrap()
    return envelope(project_read(summary))


@router.get("/{project_id}", response_model=ApiResponse[ProjectRead], summary="Get an owned project")
async def get_project(
    project_id: UUID,
    principal: CurrentPrincipalDependency,
    projects: ProjectServiceDependency,
) -> ApiResponse[ProjectRead]:
    summary = (await projects.get_project(project_id, principal.user_id)).unwrap()
    return envelope(project_read(summary))


@router.get(
    "/{project_id}/tasks",
    response_model=ApiResponse[list[TaskRead]],
    summary="List a project's tasks in board order",
)
async def list_project_tasks(
    project_id: UUID,
    principal: CurrentPrincipalDependency,
    tasks: TaskServiceDependency,
) -> ApiResponse[list[TaskRead]]:
    board = (await tasks.list_tasks(project_id, principal.user_id)).unwrap()
    return envelope([TaskRead.model_validate(task) for task in board])

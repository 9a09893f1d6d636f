from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy import func
from sqlmodel import select

from taskboard.models import Project, Task, TaskStatus
from taskboard.services import ErrorKind

pytestmark = pytest.mark.asyncio


async def test_create_project_starts_with_zero_counts(services, make_user) -> None:
    owner = await make_user()

    summary = (
        await services.projects.create_project(owner.id, name="Sprint 1", description="Two weeks")
    ).unwrap()

    assert summary.project.owner_id == owner.id
    assert summary.project.description == "Two weeks"
    assert (summary.counts.total, summary.counts.todo, summary.counts.in_progress, summary.counts.done) == (
        0,
        0,
        0,
        0,
    )


async def test_list_projects_only_returns_owned_newest_first(services, make_user) -> None:
    owner = await make_user()
    other = await make_user()
    first = (await services.projects.create_project(owner.id, name="First")).unwrap().project
    second = (await services.projects.create_project(owner.id, name="Second")).unwrap().project
    (await services.projects.create_project(other.id, name="Not mine")).unwrap()

    projects = (await services.projects.list_projects(owner.id)).unwrap()

    assert [summary.project.id for summary in projects] == [second.id, first.id]


async def test_list_projects_counts_track_live_tasks(services, make_user) -> None:
    owner = await make_user()
    project = (await services.projects.create_project(owner.id, name="Board")).unwrap().project
    todo = (await services.tasks.create_task(owner.id, project_id=project.id, title="one")).unwrap()
    (
        await services.tasks.create_task(
            owner.id, project_id=project.id, title="two", status=TaskStatus.IN_PROGRESS
        )
    ).unwrap()
    (await services.tasks.update_task(todo.id, owner.id, {"status": TaskStatus.DONE})).unwrap()

    [summary] = (await services.projects.list_projects(owner.id)).unwrap()

    assert summary.counts.todo == 0
    assert summary.counts.in_progress == 1
    assert summary.counts.done == 1
    assert summary.counts.total == 2

    (await services.tasks.delete_task(todo.id, owner.id)).unwrap()
    [summary] = (await services.projects.list_projects(owner.id)).unwrap()
    assert summary.counts.total == 1


async def test_deleting_project_cascades_to_tasks(services, session_factory, make_user) -> None:
    owner = await make_user()
    project = (await services.projects.create_project(owner.id, name="Doomed")).unwrap().project
    for title in ("a", "b", "c"):
        (await services.tasks.create_task(owner.id, project_id=project.id, title=title)).unwrap()

    async with session_factory() as session:
        stored = await session.get(Project, project.id)
        await session.delete(stored)
        await session.commit()

    async with session_factory() as session:
        remaining = (
            await session.exec(select(func.count(Task.id)).where(Task.project_id == project.id))
        ).one()
    assert remaining == 0


async def test_get_project_returns_counts_for_owner_only(services, make_user) -> None:
    owner = await make_user()
    other = await make_user()
    project = (await services.projects.create_project(owner.id, name="Board")).unwrap().project
    for status in (TaskStatus.TODO, TaskStatus.DONE, TaskStatus.DONE):
        (await services.tasks.create_task(owner.id, project_id=project.id, title="t", status=status)).unwrap()

    summary = (await services.projects.get_project(project.id, owner.id)).unwrap()

    assert summary.project.id == project.id
    assert (summary.counts.todo, summary.counts.done, summary.counts.total) == (1, 2, 3)
    foreign = await services.projects.get_project(project.id, other.id)
    missing = await services.projects.get_project(uuid4(), owner.id)
    assert foreign.unwrap_error().kind is ErrorKind.FORBIDDEN
    assert missing.unwrap_error().kind is ErrorKind.NOT_FOUND

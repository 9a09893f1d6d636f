from __future__ import annotations

from uuid import uuid4

import pytest

from taskboard.errors import ForbiddenError, NotFoundError
from taskboard.models import TaskStatus
from taskboard.services import ErrorKind
from taskboard.services.access import PROJECT_FORBIDDEN, PROJECT_NOT_FOUND

pytestmark = pytest.mark.asyncio


async def test_owner_gets_project_with_counts(services, session_factory, make_user) -> None:
    owner = await make_user()
    project = (await services.projects.create_project(owner.id, name="Sprint 1")).unwrap().project
    for title, status in (("a", TaskStatus.TODO), ("b", TaskStatus.TODO), ("c", TaskStatus.DONE)):
        (await services.tasks.create_task(owner.id, project_id=project.id, title=title, status=status)).unwrap()

    async with session_factory() as session:
        summary = (await services.guard.get_owned_project(session, project.id, owner.id)).unwrap()

    assert summary.project.id == project.id
    assert summary.counts.todo == 2
    assert summary.counts.in_progress == 0
    assert summary.counts.done == 1
    assert summary.counts.total == 3


async def test_foreign_principal_is_forbidden(services, session_factory, make_user) -> None:
    owner = await make_user()
    project = (await services.projects.create_project(owner.id, name="Sprint 1")).unwrap().project

    async with session_factory() as session:
        result = await services.guard.get_owned_project(session, project.id, uuid4())

    assert not result.is_ok
    assert result.unwrap_error().kind is ErrorKind.FORBIDDEN
    assert result.unwrap_error().message == PROJECT_FORBIDDEN
    with pytest.raises(ForbiddenError):
        result.unwrap()


async def test_missing_project_is_not_found_for_anyone(services, session_factory, make_user) -> None:
    owner = await make_user()

    async with session_factory() as session:
        for principal in (owner.id, uuid4()):
            result = await services.guard.get_owned_project(session, uuid4(), principal)
            assert result.unwrap_error().kind is ErrorKind.NOT_FOUND
            assert result.unwrap_error().message == PROJECT_NOT_FOUND

    with pytest.raises(NotFoundError) as exc_info:
        result.unwrap()
    assert exc_info.value.status_code == 404


async def test_locking_read_behaves_like_plain_read(services, session_factory, make_user) -> None:
    owner = await make_user()
    project = (await services.projects.create_project(owner.id, name="Locked")).unwrap().project

    async with session_factory() as session:
        locked = await services.guard.get_owned_project(session, project.id, owner.id, lock=True)
        denied = await services.guard.get_owned_project(session, project.id, uuid4(), lock=True)

    assert locked.unwrap().counts.total == 0
    assert denied.unwrap_error().kind is ErrorKind.FORBIDDEN


async def test_counts_can_be_skipped(services, session_factory, make_user) -> None:
    owner = await make_user()
    project = (await services.projects.create_project(owner.id, name="Gate")).unwrap().project
    (await services.tasks.create_task(owner.id, project_id=project.id, title="a")).unwrap()

    async with session_factory() as session:
        gated = await services.guard.get_owned_project(session, project.id, owner.id, with_counts=False)
        denied = await services.guard.get_owned_project(session, project.id, uuid4(), with_counts=False)

    assert gated.unwrap().project.id == project.id
    assert gated.unwrap().counts.total == 0
    assert denied.unwrap_error().kind is ErrorKind.FORBIDDEN

"""Seed script for populating development data."""

from __future__ import annotations

import asyncio
import logging

from ..core.config import Settings, get_settings
from ..core.logging import configure_logging
from ..models import TaskPriority, TaskStatus
from ..services import ServiceContainer, build_services
from .session import SessionFactory, create_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"
DEMO_PROJECT = "Demo board"

_DEMO_TASKS: tuple[tuple[str, TaskStatus, TaskPriority], ...] = (
    ("Set up local environment", TaskStatus.DONE, TaskPriority.MEDIUM),
    ("Sketch the board layout", TaskStatus.IN_PROGRESS, TaskPriority.HIGH),
    ("Write onboarding notes", TaskStatus.TODO, TaskPriority.LOW),
    ("Plan the first sprint", TaskStatus.TODO, TaskPriority.HIGH),
)


async def seed(session_factory: SessionFactory, settings: Settings) -> ServiceContainer:
    """Populate a demo user, project and tasks; running it twice changes nothing."""

    services = build_services(session_factory, settings)

    login = await services.auth.login(email=DEMO_EMAIL, password=DEMO_PASSWORD)
    if login.is_ok:
        user = login.unwrap().user
    else:
        user = (
            await services.auth.register(email=DEMO_EMAIL, password=DEMO_PASSWORD, name="Demo User")
        ).unwrap().user

    projects = (await services.projects.list_projects(user.id)).unwrap()
    if any(summary.project.name == DEMO_PROJECT for summary in projects):
        logger.info("Seed data already present", extra={"user_id": str(user.id)})
        return services

    project = (
        await services.projects.create_project(
            user.id,
            name=DEMO_PROJECT,
            description="Sample project created by the seed script.",
        )
    ).unwrap().project
    for title, status, priority in _DEMO_TASKS:
        (
            await services.tasks.create_task(
                user.id,
                project_id=project.id,
                title=title,
                status=status,
                priority=priority,
                assignee_id=user.id,
            )
        ).unwrap()
    logger.info("Seed data created", extra={"user_id": str(user.id), "project_id": str(project.id)})
    return services


async def _run() -> None:
    settings = get_settings()
    configure_logging(settings)
    engine = create_engine(settings)
    try:
        await init_db(engine)
        await seed(create_session_factory(engine), settings)
    finally:
        await engine.dispose()


def main() -> None:
    """Entry-point hook for the ``taskboard-seed`` console script."""
    asyncio.run(_run())


if __name__ == "__main__":  # pragma: no cover - manual execution entry-point
    main()

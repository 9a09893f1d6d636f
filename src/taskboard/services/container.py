"""Build the service graph once per application."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.config import Settings
from ..core.locks import KeyedLock
from ..db import SessionFactory
from .access import ProjectAccessGuard
from .auth import AuthService
from .ordering import TaskOrderingEngine
from .projects import ProjectService
from .tasks import TaskService


@dataclass(frozen=True, slots=True)
class ServiceContainer:
    auth: AuthService
    projects: ProjectService
    tasks: TaskService
    guard: ProjectAccessGuard
    ordering: TaskOrderingEngine
    locks: KeyedLock


def build_services(session_factory: SessionFactory, settings: Settings) -> ServiceContainer:
    """Wire repositories, guard, ordering engine and lock registry into services."""

    guard = ProjectAccessGuard()
    ordering = TaskOrderingEngine()
    locks = KeyedLock()
    return ServiceContainer(
        auth=AuthService(session_factory, settings),
        projects=ProjectService(session_factory, guard=guard),
        tasks=TaskService(session_factory, guard=guard, ordering=ordering, locks=locks),
        guard=guard,
        ordering=ordering,
        locks=locks,
    )


__all__ = ["ServiceContainer", "build_services"]

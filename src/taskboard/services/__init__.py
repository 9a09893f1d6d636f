"""Service layer: access guard, ordering engine and public operations."""

from __future__ import annotations

from .access import ProjectAccessGuard, ProjectSummary, TaskCounts
from .auth import AuthResult, AuthService, Principal
from .container import ServiceContainer, build_services
from .ordering import TaskOrderingEngine
from .projects import ProjectService
from .results import ErrorKind, ServiceError, ServiceResult
from .tasks import TaskService

__all__ = [
    "AuthResult",
    "AuthService",
    "ErrorKind",
    "Principal",
    "ProjectAccessGuard",
    "ProjectService",
    "ProjectSummary",
    "ServiceContainer",
    "ServiceError",
    "ServiceResult",
    "TaskCounts",
    "TaskOrderingEngine",
    "TaskService",
    "build_services",
]

"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from .core.config import Settings
from .core.context import bind_principal_id
from .errors import UnauthorizedError
from .services import AuthService, Principal, ProjectService, ServiceContainer, TaskService

MISSING_CREDENTIALS = "Missing or malformed authorization header"

# Login takes a JSON body, so the scheme only documents and extracts the bearer token.
_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_services(request: Request) -> ServiceContainer:
    """Return the service graph built for this application."""

    return request.app.state.services


SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
ServicesDependency = Annotated[ServiceContainer, Depends(get_services)]


def get_auth_service(services: ServicesDependency) -> AuthService:
    return services.auth


def get_project_service(services: ServicesDependency) -> ProjectService:
    return services.projects


def get_task_service(services: ServicesDependency) -> TaskService:
    return services.tasks


AuthServiceDependency = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDependency = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDependency = Annotated[TaskService, Depends(get_task_service)]


async def get_current_principal(
    auth: AuthServiceDependency,
    token: str | None = Depends(_oauth2_scheme),
) -> Principal:
    """Resolve the bearer token into a principal or fail with 401."""

    if not token:
        raise UnauthorizedError(MISSING_CREDENTIALS)
    principal = (await auth.resolve_principal(token)).unwrap()
    # Each request runs in its own copied context, so the binding does not leak.
    bind_principal_id(str(principal.user_id))
    return principal


CurrentPrincipalDependency = Annotated[Principal, Depends(get_current_principal)]


__all__ = [
    "AuthServiceDependency",
    "CurrentPrincipalDependency",
    "MISSING_CREDENTIALS",
    "ProjectServiceDependency",
    "ServicesDependency",
    "SettingsDependency",
    "TaskServiceDependency",
    "get_current_principal",
    "get_services",
]

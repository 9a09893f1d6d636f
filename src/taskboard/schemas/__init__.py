"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AuthPayload, LoginRequest, RegisterRequest
from .base import CamelModel
from .envelope import ApiResponse, ErrorResponse, FieldError, envelope
from .project import ProjectCreate, ProjectRead, TaskCountsRead
from .system import HealthCheckResponse, MetadataResponse
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import UserPublic, UserSummary

__all__ = [
    "ApiResponse",
    "AuthPayload",
    "CamelModel",
    "ErrorResponse",
    "FieldError",
    "HealthCheckResponse",
    "LoginRequest",
    "MetadataResponse",
    "ProjectCreate",
    "ProjectRead",
    "RegisterRequest",
    "TaskCountsRead",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "UserPublic",
    "UserSummary",
    "envelope",
]

"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr

from .base import CamelModel


class UserPublic(CamelModel):
    """Public representation of a user; the password hash never leaves the service."""

    id: UUID
    email: EmailStr
    name: str
    created_at: datetime


class UserSummary(CamelModel):
    """Compact user reference embedded in task payloads."""

    id: UUID
    name: str
    email: EmailStr


__all__ = ["UserPublic", "UserSummary"]

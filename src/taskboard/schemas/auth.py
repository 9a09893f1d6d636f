"""Schemas describing authentication payloads."""

from __future__ import annotations

from pydantic import EmailStr, Field

from .base import CamelModel
from .user import UserPublic


class RegisterRequest(CamelModel):
    """Incoming payload for registering a new user."""

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=1, max_length=100)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class AuthPayload(CamelModel):
    """Registered or authenticated user together with a bearer token."""

    user: UserPublic
    token: str


__all__ = ["AuthPayload", "LoginRequest", "RegisterRequest"]

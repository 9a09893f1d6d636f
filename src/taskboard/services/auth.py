"""Authentication service: registration, login and bearer token resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool

from ..core.config import Settings
from ..core.security import JWTError, create_access_token, decode_token, get_password_hash, verify_password
from ..db import SessionFactory
from ..models import User
from ..repositories import UserRepository
from .results import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"
INVALID_CREDENTIALS = "Invalid email or password"
INVALID_TOKEN = "Invalid or expired token"


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated identity behind a request."""

    user_id: UUID
    email: str


@dataclass(slots=True)
class AuthResult:
    user: User
    token: str


def normalise_email(email: str) -> str:
    return email.strip().lower()


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash verified in place of a missing user's so unknown emails still pay for bcrypt."""
    return get_password_hash("taskboard-unknown-account")


def _check_password(password: str, hashed_password: str | None) -> bool:
    return verify_password(password, hashed_password if hashed_password is not None else _dummy_hash())


class AuthService:
    """High-level authentication workflows."""

    def __init__(self, session_factory: SessionFactory, settings: Settings) -> None:
        self._session_factory = session_factory
        self._settings = settings

    def issue_token(self, user: User) -> str:
        return create_access_token(subject=user.id, email=user.email, settings=self._settings).token

    async def register(self, *, email: str, password: str, name: str) -> ServiceResult[AuthResult]:
        email = normalise_email(email)
        hashed_password = await run_in_threadpool(get_password_hash, password)
        async with self._session_factory() as session:
            users = UserRepository(session)
            if await users.get_by_email(email) is not None:
                return ServiceResult.failure(ServiceError.conflict(EMAIL_TAKEN))
            try:
                user = await users.add(User(email=email, name=name.strip(), hashed_password=hashed_password))
                await session.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration for the same email.
                await session.rollback()
                return ServiceResult.failure(ServiceError.conflict(EMAIL_TAKEN))
        logger.info("User registered", extra={"user_id": str(user.id)})
        return ServiceResult.ok(AuthResult(user=user, token=self.issue_token(user)))

    async def login(self, *, email: str, password: str) -> ServiceResult[AuthResult]:
        """Authenticate; unknown email and wrong password fail identically."""

        async with self._session_factory() as session:
            user = await UserRepository(session).get_by_email(normalise_email(email))
        stored_hash = user.hashed_password if user is not None else None
        verified = await run_in_threadpool(_check_password, password, stored_hash)
        if user is None or not verified:
            logger.warning("Login failed")
            return ServiceResult.failure(ServiceError.unauthorized(INVALID_CREDENTIALS))
        return ServiceResult.ok(AuthResult(user=user, token=self.issue_token(user)))

    async def resolve_principal(self, token: str) -> ServiceResult[Principal]:
        """Turn a bearer token into a :class:`Principal` for an existing user."""

        try:
            payload = decode_token(
                token=token,
                secret=self._settings.jwt_secret_key,
                algorithm=self._settings.jwt_algorithm,
            )
            user_id = UUID(str(payload["sub"]))
        except (JWTError, KeyError, ValueError):
            return ServiceResult.failure(ServiceError.unauthorized(INVALID_TOKEN))

        async with self._session_factory() as session:
            user = await UserRepository(session).get(user_id)
        if user is None:
            return ServiceResult.failure(ServiceError.unauthorized(INVALID_TOKEN))
        return ServiceResult.ok(Principal(user_id=user.id, email=user.email))


__all__ = [
    "AuthResult",
    "AuthService",
    "EMAIL_TAKEN",
    "INVALID_CREDENTIALS",
    "INVALID_TOKEN",
    "Principal",
    "normalise_email",
]

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count
from pathlib import Path
from uuid import UUID

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from taskboard.core.config import Settings
from taskboard.db import SessionFactory, create_engine, create_session_factory, init_db
from taskboard.main import create_app
from taskboard.services import ServiceContainer, build_services


@dataclass(slots=True)
class RegisteredUser:
    id: UUID
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'taskboard.db'}",
        jwt_secret_key="test-secret-key",
    )


@pytest_asyncio.fixture
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> SessionFactory:
    return create_session_factory(engine)


@pytest.fixture()
def services(session_factory: SessionFactory, settings: Settings) -> ServiceContainer:
    return build_services(session_factory, settings)


@pytest.fixture()
def app(settings: Settings, session_factory: SessionFactory) -> FastAPI:
    return create_app(settings, session_factory=session_factory)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture()
def make_user(services: ServiceContainer) -> Callable[..., Awaitable[RegisteredUser]]:
    counter = count()

    async def _factory(
        *,
        email: str | None = None,
        password: str = "secret123",
        name: str | None = None,
    ) -> RegisteredUser:
        index = next(counter)
        actual_email = email or f"user-{index}@example.com"
        result = (
            await services.auth.register(
                email=actual_email,
                password=password,
                name=name or f"User {index}",
            )
        ).unwrap()
        return RegisteredUser(
            id=result.user.id,
            email=result.user.email,
            password=password,
            token=result.token,
        )

    return _factory

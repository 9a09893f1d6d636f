"""Entry point for the taskboard FastAPI application."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .db import SessionFactory, create_engine, create_session_factory, init_db
from .errors import register_exception_handlers
from .services import build_services

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: SessionFactory | None = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    Passing ``session_factory`` lets callers (tests, scripts) bring their own
    database; the app then leaves engine lifecycle and schema creation to them.
    """

    settings = settings or get_settings()
    configure_logging(settings)

    router_prefix = settings.router_prefix
    openapi_url = "/openapi.json" if not router_prefix else f"{router_prefix}/openapi.json"

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Multi-tenant Kanban task tracker.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=openapi_url,
    )

    engine = None
    if session_factory is None:
        engine = create_engine(settings)
        session_factory = create_session_factory(engine)

    application.state.settings = settings
    application.state.services = build_services(session_factory, settings)

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if router_prefix:
        application.include_router(api_router, prefix=router_prefix)
    else:
        application.include_router(api_router)

    application.include_router(health_router)

    register_exception_handlers(application)

    if engine is not None:

        @application.on_event("startup")
        async def _create_tables() -> None:
            if settings.create_tables:
                logger.info("Creating database tables", extra={"database": engine.url.render_as_string()})
                await init_db(engine)

        @application.on_event("shutdown")
        async def _dispose_engine() -> None:
            await engine.dispose()

    return application


app = create_app()


def run() -> None:
    """Convenience entry point for the ``taskboard`` console script."""

    settings: Settings = get_settings()
    uvicorn.run(
        "taskboard.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )

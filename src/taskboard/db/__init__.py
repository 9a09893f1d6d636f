"""Database related helpers."""

from __future__ import annotations

from .session import SessionFactory, create_engine, create_session_factory, init_db, session_scope

__all__ = ["SessionFactory", "create_engine", "create_session_factory", "init_db", "session_scope"]

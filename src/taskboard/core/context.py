"""Request-scoped context shared with log records."""

from __future__ import annotations

from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")
_principal_ctx_var: ContextVar[str] = ContextVar("principal_id", default="-")


def get_request_id() -> str:
    """Return the request identifier for the current execution context."""

    return _request_id_ctx_var.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _request_id_ctx_var.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id_ctx_var.reset(token)


def get_principal_id() -> str:
    """Return the authenticated principal bound to the current request, or ``-``."""

    return _principal_ctx_var.get()


def bind_principal_id(principal_id: str) -> Token[str]:
    return _principal_ctx_var.set(principal_id)


def reset_principal_id(token: Token[str]) -> None:
    _principal_ctx_var.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "bind_principal_id",
    "bind_request_id",
    "get_principal_id",
    "get_request_id",
    "reset_principal_id",
    "reset_request_id",
]

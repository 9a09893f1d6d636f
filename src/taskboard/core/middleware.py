"""HTTP middleware binding correlation identifiers to each request."""

from __future__ import annotations

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .context import REQUEST_ID_HEADER, bind_request_id, reset_request_id

# Incoming ids are echoed into logs and headers, so only short opaque tokens are trusted.
_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation identifier to each request/response cycle."""

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):  # type: ignore[override]
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = self._resolve_request_id(request.headers.get(self._header_name))
        token = bind_request_id(request_id)
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers.setdefault(self._header_name, request_id)
        return response

    @staticmethod
    def _resolve_request_id(incoming: str | None) -> str:
        if incoming and _ACCEPTED_REQUEST_ID.match(incoming):
            return incoming
        return str(uuid.uuid4())


__all__ = ["CorrelationIdMiddleware"]

"""
Snippetbox: Request ID Middleware
=================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
How:   Uses the client's X-Request-ID header when it is a plausible token,
       otherwise a short uuid4; stores it in a ContextVar for loggers and
       error handlers, and returns it in the X-Request-ID response header.
"""

import re
from typing import Optional
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up in log lines and on the error page
_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    # 8 characters is enough to correlate log lines
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """Reuse the client's ID if it is a short token, else mint a fresh one."""
    if header_value and _CLIENT_ID.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that tags every request and response with a request ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = rid
        return response

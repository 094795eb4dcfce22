"""
Snippetbox: Request Logging Middleware
======================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client IP. Requests that touch
       a single snippet (viewing one, or creating one and being redirected
       to it) also carry `snippet=<id>` so a snippet's history can be
       grepped out of the access log.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged; snippet content stays out of the logs.
"""

import logging
import re
import time
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippetbox.middleware.request_id import request_id_var

logger = logging.getLogger("snippetbox.access")

_API_SNIPPET_PATH = re.compile(r"/api/snippets/(\d+)")


def snippet_ref(request: Request, response: Response) -> Optional[str]:
    """
    The id of the snippet a request was about, if any.

    Looked up in order: the redirect target after a create, the
    /api/snippets/{id} path, the `id` query parameter of /snippet.
    """
    location = response.headers.get("location")
    if location:
        target = urlsplit(location)
        if target.path == "/snippet":
            ids = parse_qs(target.query).get("id")
            if ids:
                return ids[0]

    path = request.url.path
    match = _API_SNIPPET_PATH.fullmatch(path)
    if match:
        return match.group(1)
    if path == "/snippet":
        return request.query_params.get("id")
    return None


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request, tagged with the snippet id where there is one.

    /health is skipped: monitors hit it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        snippet_id = snippet_ref(request, response)
        tag = f" snippet={snippet_id}" if snippet_id else ""

        logger.log(
            level_for(response.status_code),
            "%s %s %d %.1fms%s [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            tag,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "snippet_id": snippet_id,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response

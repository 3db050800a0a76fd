"""Request ID middleware: accepts a well-formed client X-Request-Id or mints one."""

import re
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_CLIENT_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(header_value: str | None) -> str:
    """Client ids that are too long or carry odd characters are replaced, so they can't pollute logs."""
    if header_value and _CLIENT_ID_RE.fullmatch(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind request id, method, and path to the structlog context and echo the id back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get("X-Request-Id"))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response

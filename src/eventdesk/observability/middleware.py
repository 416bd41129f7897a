"""
eventdesk.observability.middleware

Per-request logging context and procedure timing.

Responsibilities:
- Accept or mint an `x-request-id` and echo it on the response.
- Bind the request id and the RPC procedure name into structlog contextvars.
- Emit one `procedure_completed` line per `/rpc/*` call with status and latency.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from eventdesk.observability.logging import get_logger

RPC_PREFIX = "/rpc/"
REQUEST_ID_HEADER = "x-request-id"

log = get_logger(__name__)


def procedure_name(path: str) -> str | None:
    if not path.startswith(RPC_PREFIX):
        return None
    return path[len(RPC_PREFIX) :] or None


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        procedure = procedure_name(request.url.path)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        if procedure is not None:
            structlog.contextvars.bind_contextvars(procedure=procedure)

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            if procedure is not None:
                log.info(
                    "procedure_completed",
                    status=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

"""
FastAPI middleware for request logging.

Tags each request with an ID (reusing the caller's X-Request-ID when sent)
so resolver log lines can be correlated with the booking flow that asked.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request ID (available across async calls)
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_ctx.get()


def _incoming_request_id(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH:
        return incoming
    return str(uuid.uuid4())[:8]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with its ID and elapsed time.

    Response headers:
    - X-Request-ID: caller-supplied or generated request ID
    - X-Response-Time: processing time in seconds
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        req_id = _incoming_request_id(request)
        token = request_id_ctx.set(req_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            logger.error(
                f"[{req_id}] {request.method} {request.url.path} failed after {elapsed:.3f}s: {e}",
                extra={"request_id": req_id, "elapsed_ms": elapsed * 1000},
                exc_info=True,
            )
            raise
        finally:
            request_id_ctx.reset(token)

        elapsed = time.perf_counter() - start_time
        logger.info(
            f"[{req_id}] {request.method} {request.url.path} -> {response.status_code} in {elapsed:.3f}s",
            extra={
                "request_id": req_id,
                "status_code": response.status_code,
                "elapsed_ms": elapsed * 1000,
            },
        )

        response.headers[REQUEST_ID_HEADER] = req_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"
        return response

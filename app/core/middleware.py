import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("mail_relay.requests")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add X-Request-ID header for tracing.

    If the client sends X-Request-ID, it is preserved.
    Otherwise, a new UUID is generated.

    The request ID is:
    - Available in request.state.request_id for logging
    - Returned in response headers for client correlation
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")
        if not request_id:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id
        start_time = time.perf_counter()

        response = await call_next(request)

        logger.info(
            "REQUEST | id=%s | method=%s | path=%s | status=%s | duration=%.4fs",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - start_time,
        )
        response.headers["X-Request-ID"] = request_id

        return response

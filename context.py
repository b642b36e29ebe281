import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, latency and caller of every request"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)

        # request.state lives in the ASGI scope, so the user id set by the auth dependency is visible here
        logger.info(
            "%s %s -> %s (%.1fms) user=%s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
            getattr(request.state, "user_id", None) or "-",
        )
        return response

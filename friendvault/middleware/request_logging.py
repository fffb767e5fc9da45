import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and processing time for each request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        client = request.client.host if request.client else "unknown"
        logger.info(
            "Request: %s - %s %s Status: %d Processing Time: %.4fs",
            client,
            request.method,
            request.url.path,
            response.status_code,
            process_time,
        )
        return response

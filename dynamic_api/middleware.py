"""Request logging for dynamically registered routes."""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from shared.registry.binder import request_route_path

logger = logging.getLogger(__name__)


class DynamicRouteLoggingMiddleware(BaseHTTPMiddleware):
    """Logs requests that hit a bound dynamic route; other requests pass through."""

    async def dispatch(self, request: Request, call_next):
        binder = getattr(request.app.state, "binder", None)
        path = request_route_path(request)
        if binder is None or not binder.is_bound(request.method, path):
            return await call_next(request)

        started = time.perf_counter()
        logger.info(
            f"Dynamic request: {request.method} {path}"
            f" query={dict(request.query_params)}"
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"Dynamic request failed: {request.method} {path}")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Dynamic response: {request.method} {path}"
            f" -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

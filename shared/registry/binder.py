"""Attach dynamic routes to a FastAPI app exactly once per (method, path)."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.routing import compile_path

from .errors import InvalidRouteError
from .records import normalize_method, normalize_path
from .table import RouteTable

logger = logging.getLogger(__name__)


def request_route_path(request: Request) -> str:
    """Path of a request as the router matched it, without any root_path prefix."""
    path = request.scope["path"]
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path) and path[len(root_path):].startswith("/"):
        return path[len(root_path):]
    return path


class RouteBinder:
    """Owns the decision of whether a (method, path) pair needs a live route.

    Every register() call refreshes the route table; only the first call for
    a pair adds a route to the app. Bound routes are never removed.
    """

    def __init__(self, app: FastAPI, table: RouteTable):
        self.app = app
        self.table = table
        self._bound: set[tuple[str, str]] = set()

    def check(self, path: str, method: str) -> tuple[str, str]:
        """
        Normalize a (method, path) pair and make sure the router accepts it.

        Raises MethodNotAllowedError or InvalidRouteError.
        """
        method_upper = normalize_method(method)
        path = normalize_path(path)
        try:
            compile_path(path)
        except (AssertionError, ValueError) as e:
            raise InvalidRouteError(f"Invalid route path {path}: {e}")
        return method_upper, path

    def register(self, path: str, method: str, response: Any) -> bool:
        """
        Refresh the live response for a route and bind it if needed.

        Returns True if a new route was added to the app.
        Raises before any side effect if the pair is rejected by check().
        """
        method_upper, path = self.check(path, method)

        self.table.set(method_upper, path, response)

        if (method_upper, path) in self._bound:
            return False

        self.app.add_api_route(
            path,
            self._serve,
            methods=[method_upper],
            include_in_schema=False,
            name=f"dynamic:{method_upper} {path}",
        )
        self._bound.add((method_upper, path))
        logger.info(f"Registered dynamic route: [{method_upper}] {path}")
        return True

    def is_bound(self, method: str, path: str) -> bool:
        return (method.upper(), path) in self._bound

    def bound(self) -> list[tuple[str, str]]:
        return sorted(self._bound)

    async def _serve(self, request: Request) -> JSONResponse:
        # Read at request time so updates apply without rebinding.
        return JSONResponse(self.table.get(request.method, request_route_path(request)))

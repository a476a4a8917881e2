"""Dynamic route registry: storage, live binding and documentation."""

from .binder import RouteBinder
from .errors import (
    InvalidRouteError,
    MethodNotAllowedError,
    RegistryError,
    RouteNotFoundError,
)
from .filenames import route_filename
from .openapi import build_openapi_spec
from .records import (
    ALLOWED_METHODS,
    RouteRecord,
    ensure_json_value,
    loads_json,
    normalize_method,
    normalize_path,
)
from .schema import infer_schema
from .startup import reconcile_routes
from .store import RouteStore
from .table import RouteTable

__all__ = [
    "ALLOWED_METHODS",
    "RouteRecord",
    "normalize_method",
    "normalize_path",
    "loads_json",
    "ensure_json_value",
    "route_filename",
    "RouteStore",
    "RouteTable",
    "RouteBinder",
    "infer_schema",
    "build_openapi_spec",
    "reconcile_routes",
    "RegistryError",
    "InvalidRouteError",
    "MethodNotAllowedError",
    "RouteNotFoundError",
]

"""Route record model and method/path normalization."""

import json
from dataclasses import dataclass
from typing import Any

from .errors import InvalidRouteError, MethodNotAllowedError

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD"})
REQUIRED_FIELDS = ("path", "method", "response")


def normalize_method(method: Any) -> str:
    """Upper-case a method and check it against ALLOWED_METHODS."""
    if not isinstance(method, str):
        raise InvalidRouteError("method must be a string")
    method_upper = method.upper()
    if method_upper not in ALLOWED_METHODS:
        raise MethodNotAllowedError(method)
    return method_upper


def normalize_path(path: str) -> str:
    """Ensure a route path is rooted."""
    return path if path.startswith("/") else f"/{path}"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def loads_json(text: str | bytes) -> Any:
    """json.loads that rejects NaN and Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


def ensure_json_value(value: Any, field_name: str = "response") -> Any:
    """Check that a decoded value can be written back as standard JSON."""
    try:
        json.dumps(value, allow_nan=False)
    except (TypeError, ValueError):
        raise InvalidRouteError(f"{field_name} is not valid JSON")
    return value


@dataclass
class RouteRecord:
    """A persisted dynamic endpoint."""

    path: str
    method: str
    response: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "RouteRecord":
        """
        Build a record from a stored document.

        `response` only has to be present: false, 0 and null are valid payloads.
        """
        if not isinstance(data, dict):
            raise InvalidRouteError("route document must be a JSON object")
        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise InvalidRouteError(f"Missing fields: {', '.join(missing)}")
        if not data["path"] or not isinstance(data["path"], str):
            raise InvalidRouteError("path must be a non-empty string")
        if not data["method"] or not isinstance(data["method"], str):
            raise InvalidRouteError("method must be a non-empty string")
        return cls(path=data["path"], method=data["method"], response=data["response"])

    def to_dict(self) -> dict:
        return {"path": self.path, "method": self.method, "response": self.response}

    @property
    def key(self) -> str:
        return f"{self.method.upper()} {self.path}"

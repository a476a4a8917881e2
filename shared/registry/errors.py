"""Errors raised by the route registry."""


class RegistryError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRouteError(RegistryError):
    """Missing or malformed route fields."""

    status_code = 400


class MethodNotAllowedError(InvalidRouteError):
    """HTTP method outside ALLOWED_METHODS."""

    def __init__(self, method):
        super().__init__(f"Method {method} is not allowed")
        self.method = method


class RouteNotFoundError(RegistryError):
    """No stored record resolves for a path."""

    status_code = 404

    def __init__(self, path: str):
        super().__init__(f"API metadata not found for path {path}")
        self.path = path

"""Routers for the management API."""

from . import manage

__all__ = ["manage"]

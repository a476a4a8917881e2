"""Bring live routes in line with the route store at boot."""

import logging

from .binder import RouteBinder
from .errors import RegistryError
from .store import RouteStore

logger = logging.getLogger(__name__)


def reconcile_routes(store: RouteStore, binder: RouteBinder) -> int:
    """Register every valid stored route. Returns the number registered."""
    registered = 0
    for record in store.list():
        try:
            binder.register(record.path, record.method, record.response)
        except RegistryError as e:
            logger.error(f"Error loading route {record.key}: {e}")
            continue
        except Exception:
            logger.exception(f"Unexpected error loading route {record.key}")
            continue
        registered += 1

    logger.info(f"Loaded {registered} dynamic routes from {store.directory}")
    return registered

"""In-memory response table for bound dynamic routes."""

import threading
from typing import Any


class RouteTable:
    """Current response payload per exact (method, path) pair.

    A cache of the route store, rebuilt at startup. All access goes through
    one lock so the table can be shared between the event loop and worker
    threads.
    """

    def __init__(self):
        self._entries: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def get(self, method: str, path: str) -> Any:
        """Return the stored payload, or {} when the pair has no entry yet."""
        with self._lock:
            if (method, path) in self._entries:
                return self._entries[(method, path)]
        return {}

    def set(self, method: str, path: str, value: Any) -> None:
        with self._lock:
            self._entries[(method, path)] = value

    def __contains__(self, key: tuple[str, str]) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> list[tuple[str, str]]:
        """Snapshot of the stored pairs."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        """Drop all entries (for testing)."""
        with self._lock:
            self._entries.clear()

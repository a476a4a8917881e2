"""File-backed route store: one JSON document per route path."""

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Optional

from .errors import InvalidRouteError, RegistryError, RouteNotFoundError
from .filenames import RECORD_SUFFIX, route_filename
from .records import RouteRecord, ensure_json_value, loads_json

logger = logging.getLogger(__name__)


class RouteStore:
    """Durable source of truth for dynamic routes.

    Records are keyed by `route_filename(path)`; saving a second route whose
    path derives to the same filename overwrites the first, whatever its method.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, route_path: str) -> Path:
        return self.directory / route_filename(route_path)

    def scan(self) -> Iterator[tuple[str, Any]]:
        """
        Yield (filename, document) for every readable record file.

        Non-record files are ignored. A corrupt file is logged and skipped so
        one bad record never stops the enumeration.
        """
        if not self.directory.is_dir():
            return

        for filename in sorted(p.name for p in self.directory.iterdir()):
            if not filename.endswith(RECORD_SUFFIX):
                continue
            filepath = self.directory / filename
            if not filepath.is_file():
                continue
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    document = loads_json(f.read())
            except (OSError, ValueError) as e:
                logger.error(f"Error loading route file {filename}: {e}")
                continue
            yield filename, document

    def list(self) -> list[RouteRecord]:
        """Return every valid stored record, warning about invalid ones."""
        records = []
        for filename, document in self.scan():
            try:
                records.append(RouteRecord.from_dict(document))
            except InvalidRouteError as e:
                logger.warning(f"Skipping invalid route file: {filename} ({e})")
        return records

    def save(self, record: RouteRecord) -> str:
        """Write the whole record, overwriting any existing one. Returns the filename."""
        ensure_json_value(record.response)
        content = json.dumps(record.to_dict(), indent=2, allow_nan=False) + "\n"
        self.ensure_directory()
        filepath = self.path_for(record.path)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        return filepath.name

    def load_by_path(self, route_path: str) -> Optional[RouteRecord]:
        """
        Read the record stored for a path, or None if there is none.

        A file that exists but does not hold a valid record raises
        RegistryError: the storage is broken, not the request.
        """
        filepath = self.path_for(route_path)
        if not filepath.is_file():
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return RouteRecord.from_dict(loads_json(f.read()))
        except (ValueError, InvalidRouteError) as e:
            raise RegistryError(f"Invalid route file {filepath.name}: {e}") from e

    def update(self, route_path: str, new_response: Any) -> RouteRecord:
        """Replace only the response of an existing record."""
        record = self.load_by_path(route_path)
        if record is None:
            raise RouteNotFoundError(route_path)
        record.response = new_response
        self.save(record)
        return record

"""Map route paths to storage record filenames."""

import re

RECORD_SUFFIX = ".json"
ROOT_NAME = "root"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_.\-]")


def route_filename(path: str) -> str:
    """
    Derive the record filename for a route path.

    Only the path takes part, so GET /widgets and POST /widgets share a file.

    Examples:
        "/" -> "root.json"
        "/users/list" -> "users_list.json"
        "/a b?c" -> "abc.json"
    """
    name = path[1:] if path.startswith("/") else path
    if not name:
        name = ROOT_NAME
    name = name.replace("/", "_")
    name = _UNSAFE_CHARS.sub("", name)
    return f"{name}{RECORD_SUFFIX}"

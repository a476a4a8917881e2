"""Environment configuration, read on each call so tests can override it."""

import os
from pathlib import Path


def get_apis_dir() -> Path:
    return Path(os.getenv("APIS_DIR", "./apis"))


def get_uploads_dir() -> Path:
    return Path(os.getenv("UPLOADS_DIR", "./uploads"))


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    return int(os.getenv("PORT", "3000"))


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()

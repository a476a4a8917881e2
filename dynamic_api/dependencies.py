"""FastAPI dependencies resolving registry components from app state."""

from pathlib import Path

from fastapi import Request

from shared.registry import RouteBinder, RouteStore, RouteTable


def get_store(request: Request) -> RouteStore:
    return request.app.state.store


def get_table(request: Request) -> RouteTable:
    return request.app.state.table


def get_binder(request: Request) -> RouteBinder:
    return request.app.state.binder


def get_uploads_dir(request: Request) -> Path:
    return request.app.state.uploads_dir

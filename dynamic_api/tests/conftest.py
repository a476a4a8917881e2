"""Pytest configuration for dynamic API tests."""

import json

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


@pytest.fixture
def apis_dir(tmp_path):
    return tmp_path / "apis"


@pytest.fixture
def uploads_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def write_route_file(apis_dir):
    """Write a raw route document into the store directory."""

    def _write(filename: str, document) -> None:
        apis_dir.mkdir(parents=True, exist_ok=True)
        content = document if isinstance(document, str) else json.dumps(document)
        (apis_dir / filename).write_text(content, encoding="utf-8")

    return _write


@pytest_asyncio.fixture
async def app(apis_dir, uploads_dir):
    """App on temp directories, started through its lifespan."""
    from dynamic_api.main import create_app

    app = create_app(apis_dir=apis_dir, uploads_dir=uploads_dir)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

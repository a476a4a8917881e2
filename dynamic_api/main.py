"""Dynamic API server: define JSON endpoints at runtime."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import JSONResponse, PlainTextResponse

from dynamic_api import __version__
from dynamic_api.config import get_apis_dir, get_uploads_dir
from dynamic_api.middleware import DynamicRouteLoggingMiddleware
from dynamic_api.routes import manage
from shared.registry import (
    RegistryError,
    RouteBinder,
    RouteStore,
    RouteTable,
    build_openapi_spec,
    reconcile_routes,
)

logger = logging.getLogger(__name__)

TITLE = "Dynamic FastAPI Routes"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load stored routes before serving traffic."""
    store: RouteStore = app.state.store
    store.ensure_directory()
    reconcile_routes(store, app.state.binder)
    yield


async def registry_error_handler(request: Request, exc: RegistryError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app(
    apis_dir: Optional[str | Path] = None,
    uploads_dir: Optional[str | Path] = None,
) -> FastAPI:
    """Build the app with its own store, route table and binder."""
    app = FastAPI(
        title=TITLE,
        description="Create JSON endpoints at runtime; they survive restarts.",
        version=__version__,
        lifespan=lifespan,
        # /openapi.json is built from the route store below
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )

    app.state.store = RouteStore(apis_dir if apis_dir is not None else get_apis_dir())
    app.state.table = RouteTable()
    app.state.binder = RouteBinder(app, app.state.table)
    app.state.uploads_dir = Path(uploads_dir) if uploads_dir is not None else get_uploads_dir()

    app.add_middleware(DynamicRouteLoggingMiddleware)
    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Dynamic FastAPI routes - see README for usage"

    @app.get("/openapi.json")
    async def openapi_spec(request: Request):
        """Return the OpenAPI document, rebuilt from the route store on every call."""
        return build_openapi_spec(request.app.state.store, title=TITLE)

    @app.get("/sw")
    async def swagger_ui():
        return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{TITLE} - Swagger UI")

    app.include_router(manage.router)
    return app


app = create_app()

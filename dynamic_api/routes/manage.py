"""Management API: create and update dynamic routes."""

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from dynamic_api.dependencies import get_binder, get_store, get_table, get_uploads_dir
from dynamic_api.uploads import is_json_upload, staged_upload
from shared.registry import (
    InvalidRouteError,
    RegistryError,
    RouteBinder,
    RouteRecord,
    RouteStore,
    RouteTable,
    ensure_json_value,
    loads_json,
    normalize_path,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

DEFAULT_METHOD = "GET"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


class CreateRouteRequest(BaseModel):
    path: Optional[str] = None
    method: Optional[str] = None
    response: Any = None


class CreateRouteResponse(BaseModel):
    ok: bool
    path: str
    method: str
    savedTo: str


class UpdateRouteRequest(BaseModel):
    path: Optional[str] = None
    newResponse: Any = None


class UpdateRouteResponse(BaseModel):
    ok: bool
    updated: str


def parse_json_value(value: Any, field_name: str) -> Any:
    """Decode a payload sent as a JSON-encoded string; other values pass through."""
    if not isinstance(value, str):
        return value
    try:
        return loads_json(value)
    except ValueError:
        raise InvalidRouteError(f"{field_name} is a string but not valid JSON")


def _form_text(form, name: str) -> Optional[str]:
    value = form.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidRouteError(f"{name} must be a text field")
    return value


async def _read_json_body(request: Request) -> CreateRouteRequest:
    try:
        body = loads_json(await request.body())
    except ValueError:
        raise InvalidRouteError("Request body is not valid JSON")
    try:
        return CreateRouteRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRouteError(f"Invalid request body: {e.errors()[0]['msg']}")


async def _read_uploaded_response(upload: UploadFile, uploads_dir: Path) -> Any:
    async with staged_upload(upload, uploads_dir) as staged:
        if not is_json_upload(upload):
            raise InvalidRouteError("Unsupported file type. Use .json only")
        try:
            with open(staged, "r", encoding="utf-8") as f:
                return loads_json(f.read())
        except ValueError:
            raise InvalidRouteError("Uploaded file is not valid JSON")


def _save_and_register(
    store: RouteStore,
    binder: RouteBinder,
    route_path: Optional[str],
    method: Optional[str],
    response: Any,
) -> CreateRouteResponse:
    if not route_path or not method:
        raise InvalidRouteError("Missing path or method")

    # Validate before touching disk or the router.
    method_upper, path = binder.check(route_path, method)
    record = RouteRecord(path=path, method=method_upper, response=ensure_json_value(response))

    filename = store.save(record)
    binder.register(record.path, record.method, record.response)

    return CreateRouteResponse(
        ok=True,
        path=record.path,
        method=record.method,
        savedTo=f"/{store.directory.name}/{filename}",
    )


@router.post("/create", response_model=CreateRouteResponse)
async def create_route(
    request: Request,
    store: RouteStore = Depends(get_store),
    binder: RouteBinder = Depends(get_binder),
    uploads_dir: Path = Depends(get_uploads_dir),
):
    """Create a dynamic route from a JSON body, a form, or an uploaded .json file."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            route_path = _form_text(form, "path")
            method = _form_text(form, "method") or DEFAULT_METHOD
            upload = form.get("file")

            if isinstance(upload, UploadFile):
                response = await _read_uploaded_response(upload, uploads_dir)
            else:
                if "response" not in form:
                    raise InvalidRouteError("Missing response")
                response = parse_json_value(_form_text(form, "response"), "response")
        else:
            data = await _read_json_body(request)
            route_path = data.path
            method = data.method or DEFAULT_METHOD
            if "response" not in data.model_fields_set:
                raise InvalidRouteError("Missing response")
            response = parse_json_value(data.response, "response")

        return _save_and_register(store, binder, route_path, method, response)
    except (RegistryError, HTTPException):
        raise
    except Exception as e:
        logger.exception("Error in /api/create")
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.put("/update", response_model=UpdateRouteResponse)
async def update_route(
    data: UpdateRouteRequest,
    store: RouteStore = Depends(get_store),
    table: RouteTable = Depends(get_table),
):
    """Replace the stored response of an existing dynamic route."""
    if not data.path:
        raise InvalidRouteError("Missing path")
    if "newResponse" not in data.model_fields_set:
        raise InvalidRouteError("Missing newResponse")

    new_response = ensure_json_value(
        parse_json_value(data.newResponse, "newResponse"), "newResponse"
    )

    try:
        record = store.update(data.path, new_response)
        table.set(record.method.upper(), normalize_path(record.path), new_response)
    except RegistryError:
        raise
    except Exception as e:
        logger.exception("Error in /api/update")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return UpdateRouteResponse(ok=True, updated=record.key)

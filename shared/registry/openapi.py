"""OpenAPI document generation from the route store."""

import re

from .errors import InvalidRouteError
from .filenames import RECORD_SUFFIX
from .records import RouteRecord
from .schema import infer_schema
from .store import RouteStore

OPENAPI_VERSION = "3.0.0"

_SCHEMA_NAME_UNSAFE = re.compile(r"[^a-zA-Z0-9_]")


def _create_operation() -> dict:
    return {
        "post": {
            "summary": "Create a dynamic API (JSON body or multipart file upload)",
            "description": (
                "Create a new dynamic API. You can send a JSON body or "
                "multipart/form-data with a .json file upload."
            ),
            "requestBody": {
                "required": True,
                # multipart first so Swagger UI shows the upload form by default
                "content": {
                    "multipart/form-data": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "path": {
                                    "type": "string",
                                    "description": "Route path to create",
                                    "example": "/upload-test",
                                },
                                "method": {
                                    "type": "string",
                                    "description": "HTTP method",
                                    "example": "GET",
                                },
                                "file": {
                                    "type": "string",
                                    "format": "binary",
                                    "description": "Upload a .json file containing the response",
                                },
                            },
                            "required": ["path", "file"],
                        },
                        "encoding": {"file": {"contentType": "application/json"}},
                    },
                    "application/json": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "path": {
                                    "type": "string",
                                    "description": "Route path to create",
                                    "example": "/test",
                                },
                                "method": {
                                    "type": "string",
                                    "description": "HTTP method",
                                    "example": "GET",
                                },
                                "response": {
                                    "oneOf": [
                                        {"type": "object", "description": "JSON object response"},
                                        {
                                            "type": "string",
                                            "description": "JSON string representing the response",
                                        },
                                    ]
                                },
                            },
                            "required": ["path", "response"],
                        },
                        "examples": {
                            "objectExample": {
                                "value": {
                                    "path": "/test",
                                    "method": "GET",
                                    "response": {"message": "ok"},
                                }
                            }
                        },
                    },
                },
            },
            "responses": {
                "200": {"description": "Created"},
                "400": {"description": "Missing or invalid fields"},
            },
        }
    }


def _update_operation() -> dict:
    return {
        "put": {
            "summary": "Update a dynamic API response",
            "description": "Update the stored response for an existing dynamic route.",
            "requestBody": {
                "required": True,
                "content": {
                    "application/json": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "path": {
                                    "type": "string",
                                    "description": "Route path to update",
                                    "example": "/test",
                                },
                                "newResponse": {
                                    "type": "object",
                                    "description": "New JSON response to return from the route",
                                },
                            },
                            "required": ["path", "newResponse"],
                        },
                        "example": {"path": "/test", "newResponse": {"status": "updated"}},
                    }
                },
            },
            "responses": {
                "200": {"description": "Updated"},
                "400": {"description": "Missing or invalid fields"},
                "404": {"description": "No route stored for path"},
            },
        }
    }


def schema_name(method: str, filename: str) -> str:
    """Component schema name for a stored route, e.g. Response_GET_users_list."""
    base = filename[: -len(RECORD_SUFFIX)] if filename.endswith(RECORD_SUFFIX) else filename
    return "Response_" + _SCHEMA_NAME_UNSAFE.sub("_", f"{method}_{base}")


def build_openapi_spec(
    store: RouteStore,
    title: str = "Dynamic FastAPI Routes",
    version: str = "1.0.0",
) -> dict:
    """
    Build the OpenAPI document for the management API and every stored route.

    Nothing is cached: each call re-reads the store, so the document always
    matches what is persisted even if the live route table has drifted.
    Invalid records are skipped.
    """
    spec = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": title,
            "version": version,
            "description": (
                "APIs dynamically created at runtime. "
                "This spec is generated from the stored route files."
            ),
        },
        "paths": {
            "/api/create": _create_operation(),
            "/api/update": _update_operation(),
        },
        "components": {"schemas": {}},
    }

    for filename, document in store.scan():
        try:
            record = RouteRecord.from_dict(document)
        except InvalidRouteError:
            continue

        method = record.method.upper()
        name = schema_name(method, filename)
        spec["components"]["schemas"][name] = infer_schema(record.response)

        operations = spec["paths"].setdefault(record.path, {})
        operations[method.lower()] = {
            "summary": f"Dynamic route {method} {record.path}",
            "responses": {
                "200": {
                    "description": "Successful response",
                    "content": {
                        "application/json": {
                            "schema": {"$ref": f"#/components/schemas/{name}"},
                            "example": record.response,
                        }
                    },
                }
            },
        }

    return spec

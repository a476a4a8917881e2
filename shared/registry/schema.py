"""Infer a JSON Schema from an example JSON value."""

from typing import Any


def infer_schema(value: Any) -> dict:
    """
    Describe the structure of a decoded JSON value.

    Arrays are described by their first element only; an empty array gets
    an unconstrained item schema.

    Examples:
        None -> {"type": "null"}
        2.0 -> {"type": "integer"}
        [True, "x"] -> {"type": "array", "items": {"type": "boolean"}}
    """
    if value is None:
        return {"type": "null"}
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, str):
        return {"type": "string"}
    if isinstance(value, int):
        return {"type": "integer"}
    if isinstance(value, float):
        return {"type": "integer" if value.is_integer() else "number"}
    if isinstance(value, list):
        if not value:
            return {"type": "array", "items": {}}
        return {"type": "array", "items": infer_schema(value[0])}
    if isinstance(value, dict):
        return {
            "type": "object",
            "properties": {key: infer_schema(item) for key, item in value.items()},
        }
    return {}

from __future__ import annotations
from typing import Any, Iterable, Type, TypeVar

from flask import jsonify, request
from pydantic import BaseModel, ValidationError

from errors import InvalidInput

M = TypeVar("M", bound=BaseModel)

def ok(data: Any, status: int = 200):
    return jsonify(data), status

def created(location: str, data: Any):
    resp = jsonify(data)
    resp.status_code = 201
    resp.headers["Location"] = location
    return resp

def no_content():
    return "", 204

def _pydantic_errors_safe(ve: ValidationError) -> str:
    parts = []
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "body"
        parts.append(f"{loc}: {e.get('msg')}")
    return "; ".join(parts)

def parse_body(schema: Type[M]) -> M:
    payload = request.get_json(silent=True) or {}
    try:
        return schema.model_validate(payload)
    except ValidationError as ve:
        raise InvalidInput(_pydantic_errors_safe(ve)) from None

def int_arg(name: str) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput(f"query parameter {name} must be an integer") from None

def dump(schema: Type[BaseModel], obj) -> dict:
    return schema.model_validate(obj).model_dump(mode="json")

def dump_list(schema: Type[BaseModel], rows: Iterable) -> dict:
    items = [dump(schema, r) for r in rows]
    return {"items": items, "meta": {"total": len(items)}}

"""Request parsing and validation helpers shared by the JSON controllers."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Optional, Tuple, Type, TypeVar

from flask import abort, jsonify, request
from pydantic import BaseModel, BeforeValidator, ValidationError

from rhythm.core.utils.clock import parse_day, parse_optional_day

M = TypeVar("M", bound=BaseModel)

# ISO date strings (or timestamps) normalised to the UTC calendar day.
Day = Annotated[date, BeforeValidator(parse_day)]
OptionalDay = Annotated[Optional[date], BeforeValidator(parse_optional_day)]


def json_body() -> dict:
    """Return the JSON object body; malformed or non-object JSON aborts with 400."""
    payload = request.get_json(silent=True)
    if payload is None:
        if request.get_data(cache=True):
            abort(400, description="invalid_json")
        return {}
    if not isinstance(payload, dict):
        abort(400, description="invalid_json")
    return payload


def jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err and not isinstance(err["input"], (str, int, float, bool, list, dict, type(None))):
            err["input"] = str(err["input"])
    return errors


def validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


def error(code: str, status: int):
    return jsonify({"ok": False, "error": code}), status


def parse_query(schema_cls: Type[M]) -> Tuple[Optional[M], Optional[ValidationError]]:
    data = {k: v for k, v in request.args.items()}
    try:
        return schema_cls.model_validate(data), None
    except ValidationError as exc:
        return None, exc

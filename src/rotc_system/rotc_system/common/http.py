from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Type

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_datetime


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def require_field(data: dict, name: str, *, error: Type[ValidationError] = ValidationError) -> Any:
    if name not in data or data[name] is None:
        raise error(f"Missing field: {name}")
    return data[name]


def require_int(value: Any, name: str, *, error: Type[ValidationError] = ValidationError) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise error(f"{name} must be an integer")
    return value


def optional_datetime(
    data: dict, name: str, *, error: Type[ValidationError] = ValidationError
) -> Optional[datetime]:
    value = data.get(name)
    if value in (None, ""):
        return None
    try:
        return parse_iso_datetime(str(value))
    except ValueError:
        raise error(f"{name} must be an ISO-8601 timestamp")

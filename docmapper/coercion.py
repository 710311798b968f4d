"""
Type coercion for declared keys.

Every caster is total: malformed input degrades to None instead of raising,
so attribute assignment never fails on a bad value. Parsing is delegated to
pydantic's lax validation.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from bson import ObjectId
from pydantic import TypeAdapter, ValidationError

_INT = TypeAdapter(int)
_FLOAT = TypeAdapter(float)
_BOOL = TypeAdapter(bool)
_DATETIME = TypeAdapter(datetime)


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def to_string(value: Any) -> str:
    if isinstance(value, bytes):
        return _text(value)
    return str(value)


def to_integer(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() else None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, (str, bytes)):
        text = _text(value).strip()
        if not text:
            return None
        try:
            return _INT.validate_python(text)
        except ValidationError:
            pass
        # decimal literals like "27.5" truncate the same way floats do
        number = to_float(text)
        if number is None or not math.isfinite(number):
            return None
        return int(number)
    try:
        return _INT.validate_python(value)
    except ValidationError:
        return None


def to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Decimal) and value.is_snan():
        return None
    if isinstance(value, (str, bytes)):
        value = _text(value).strip()
        if not value:
            return None
    try:
        return _FLOAT.validate_python(value)
    except ValidationError:
        return None


def to_boolean(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, bytes)):
        value = _text(value).strip().lower()
        if not value:
            return None
    try:
        return _BOOL.validate_python(value)
    except ValidationError:
        return None


def to_time(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (str, bytes)):
        value = _text(value).strip()
        if not value:
            return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        return None


def to_identifier(value: Any) -> Any:
    # ObjectIds are kept in their 24-character external form; anything else
    # (legacy integer ids, caller-chosen strings) is opaque.
    if isinstance(value, ObjectId):
        return str(value)
    return value


CASTERS: dict[Any, Callable[[Any], Any]] = {
    str: to_string,
    int: to_integer,
    bool: to_boolean,
    float: to_float,
    datetime: to_time,
    ObjectId: to_identifier,
}


def coerce(value: Any, declared_type: Any) -> Any:
    """
    Convert `value` to the canonical representation of `declared_type`.

    None stays None for every type. Types without a caster pass the value
    through unchanged.
    """
    if value is None:
        return None
    try:
        caster = CASTERS.get(declared_type)
    except TypeError:
        # unhashable type tag
        return value
    if caster is None:
        return value
    return caster(value)

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .coercion import coerce


class Key(BaseModel):
    """
    A declared, typed field of a document class.

    Can be written in a class body without a name (`fname = Key(str)`);
    the attribute name is filled in when the class is composed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = ""
    type: Any = None
    default: Any = None

    def __init__(self, type: Any = None, default: Any = None, *, name: str = "", **data: Any):
        super().__init__(name=str(name), type=type, default=default, **data)

    def coerce(self, value: Any) -> Any:
        return coerce(value, self.type)

    def default_value(self) -> Any:
        # callables (list, dict, datetime.now, ...) act as factories so
        # instances never share a mutable default
        if callable(self.default):
            return self.default()
        return self.default

    def named(self, name: str) -> "Key":
        return self.model_copy(update={"name": str(name)})

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", repr(self.type))
        return f"Key({self.name!r}, {type_name})"

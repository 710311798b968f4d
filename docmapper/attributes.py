from __future__ import annotations

from typing import Any, Mapping

from .errors import NoSuchAttribute
from .schema import SchemaRegistry, normalize_name


class IndifferentDict(dict):
    """
    Plain dict of attribute values whose lookups ignore key-name case.

    Compares equal to an ordinary dict with the same items.
    """

    def _canonical(self, key: Any) -> Any:
        key = normalize_name(key)
        if dict.__contains__(self, key):
            return key
        folded = key.casefold()
        for candidate in self.keys():
            if candidate.casefold() == folded:
                return candidate
        return key

    def __getitem__(self, key: Any) -> Any:
        return dict.__getitem__(self, self._canonical(key))

    def __contains__(self, key: object) -> bool:
        return dict.__contains__(self, self._canonical(key))

    def get(self, key: Any, default: Any = None) -> Any:
        return dict.get(self, self._canonical(key), default)


class AttributeStore:
    """
    Per-instance values for the keys declared in a SchemaRegistry.

    Every stored value has been coerced to its key's type (or is None).
    Names that do not resolve to a declared key never get stored.
    """

    def __init__(
        self,
        schema: SchemaRegistry,
        values: Mapping[Any, Any] | None = None,
        *,
        owner: str = "Document",
        apply_defaults: bool = True,
    ):
        self._schema = schema
        self._owner = owner
        self._values: dict[str, Any] = {}
        # stored documents are rehydrated as-is: a key saved as None stays None
        if apply_defaults:
            for key in schema:
                default = key.coerce(key.default_value())
                if default is not None:
                    self._values[key.name] = default
        if values:
            self.assign(values)

    def _key_for(self, name: Any):
        key = self._schema.resolve(name)
        if key is None:
            raise NoSuchAttribute(self._owner, name)
        return key

    def get(self, name: Any) -> Any:
        return self._values.get(self._key_for(name).name)

    def set(self, name: Any, value: Any) -> Any:
        key = self._key_for(name)
        coerced = key.coerce(value)
        self._values[key.name] = coerced
        return coerced

    def assign(self, values: Mapping[Any, Any]) -> None:
        for name, value in values.items():
            key = self._schema.resolve(name)
            if key is None:
                continue
            self._values[key.name] = key.coerce(value)

    def snapshot(self) -> IndifferentDict:
        # declaration order, nil-valued keys left out
        return IndifferentDict(
            (key.name, self._values[key.name])
            for key in self._schema
            if self._values.get(key.name) is not None
        )

    def has_reader(self, name: Any) -> bool:
        return normalize_name(name) in self._schema

    def has_writer(self, name: Any) -> bool:
        name = normalize_name(name)
        if name.endswith("="):
            name = name[:-1]
        return name in self._schema

    def __repr__(self) -> str:
        return f"AttributeStore({self.snapshot()!r})"

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping

from bson import ObjectId

from .identity import ID_KEY
from .keys import Key

if TYPE_CHECKING:
    from .connection import Connection


def normalize_name(name: Any) -> str:
    return name if isinstance(name, str) else str(name)


class SchemaRegistry:
    """
    Ordered mapping of key name -> Key for one document class.

    Re-declaring a name replaces its descriptor in place. Lookups through
    `resolve` fall back to a case-insensitive match.
    """

    def __init__(self, keys: Iterable[Key] = ()):
        self._keys: dict[str, Key] = {}
        self._folded: dict[str, str] = {}
        for key in keys:
            self.add(key)

    @classmethod
    def for_document(cls) -> "SchemaRegistry":
        return cls([Key(ObjectId, name=ID_KEY)])

    def add(self, key: Key) -> Key:
        if not key.name:
            raise ValueError("cannot register a key without a name")
        self._keys[key.name] = key
        self._folded[key.name.casefold()] = key.name
        return key

    def declare(self, name: Any, type: Any = None, default: Any = None) -> Key:
        return self.add(Key(type, default, name=normalize_name(name)))

    def declare_timestamps(self) -> tuple[Key, Key]:
        return self.declare("created_at", datetime), self.declare("updated_at", datetime)

    def keys(self) -> Mapping[str, Key]:
        return MappingProxyType(self._keys)

    def resolve(self, name: Any) -> Key | None:
        name = normalize_name(name)
        key = self._keys.get(name)
        if key is not None:
            return key
        canonical = self._folded.get(name.casefold())
        return self._keys.get(canonical) if canonical is not None else None

    def copy(self) -> "SchemaRegistry":
        return SchemaRegistry(self._keys.values())

    def __contains__(self, name: object) -> bool:
        return self.resolve(name) is not None

    def __iter__(self) -> Iterator[Key]:
        return iter(self._keys.values())

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"SchemaRegistry({', '.join(self._keys)})"


@dataclass(frozen=True)
class StoreBinding:
    """
    Where a document class persists. Unset fields fall through to the
    process-wide defaults in `docmapper.config` at lookup time.
    """

    connection: "Connection | None" = None
    database_name: str | None = None
    collection_name: str | None = None

    def override(self, **changes: Any) -> "StoreBinding":
        return replace(self, **changes)

from __future__ import annotations

from typing import Any


class MapperError(Exception):
    """Base class for every failure raised by docmapper."""


class NoSuchAttribute(MapperError, AttributeError):
    """
    Raised when a read or write targets a name that is not a declared key.

    Subclasses AttributeError so `getattr(doc, name, default)` and `hasattr`
    keep working on documents.
    """

    def __init__(self, owner: str, name: Any):
        self.owner = owner
        self.attribute = name
        super().__init__(f"{owner!s} has no key {name!r}")


class ArgumentError(MapperError, TypeError):
    """Raised for malformed call shapes, before the store is touched."""


class DocumentNotFound(MapperError, LookupError):
    def __init__(self, collection: str, document_id: Any):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"no document with id {document_id!r} in {collection}")


class ConfigurationError(MapperError, ValueError):
    """Unknown store backend or malformed collection namespace."""

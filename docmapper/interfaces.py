from __future__ import annotations

from typing import Any, Protocol

from .errors import ConfigurationError


class DocumentStore(Protocol):
    """
    Untyped document backend. Collections are addressed by a namespace of the
    form "<database>.<collection>"; documents are plain string-keyed dicts
    whose "_id" entry is the document's identifier.
    """

    def insert(self, namespace: str, document: dict[str, Any]) -> Any:
        """Store `document`, generating an "_id" if it has none; return the id."""
        ...

    def update_by_id(self, namespace: str, document_id: Any, document: dict[str, Any]) -> None:
        """Replace the document stored under `document_id` (creating it if absent)."""
        ...

    def find_by_id(self, namespace: str, document_id: Any) -> dict[str, Any] | None:
        ...

    def count(self, namespace: str) -> int:
        ...

    def clear(self, namespace: str) -> None:
        ...


def split_namespace(namespace: str) -> tuple[str, str]:
    database, sep, collection = namespace.partition(".")
    if not sep or not database or not collection:
        raise ConfigurationError(f"malformed collection namespace: {namespace!r}")
    return database, collection

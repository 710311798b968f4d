from __future__ import annotations

import copy
import logging
from typing import Any

from .identity import ID_KEY, generate_id
from .interfaces import DocumentStore
from .locks import LockRegistry

logger = logging.getLogger(__name__)


class MemoryDocumentStore(DocumentStore):
    """
    In-process document store.

    - Documents are deep-copied on the way in and out, so callers never
      share state with the store.
    - Inserting onto an existing id replaces it (last writer wins).
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[Any, dict[str, Any]]] = {}
        self._locks = LockRegistry()

    def _collection(self, namespace: str) -> dict[Any, dict[str, Any]]:
        return self._collections.setdefault(namespace, {})

    def insert(self, namespace: str, document: dict[str, Any]) -> Any:
        doc = copy.deepcopy(document)
        if doc.get(ID_KEY) is None:
            doc[ID_KEY] = generate_id()
        with self._locks.lock_for(namespace):
            self._collection(namespace)[doc[ID_KEY]] = doc
        return doc[ID_KEY]

    def update_by_id(self, namespace: str, document_id: Any, document: dict[str, Any]) -> None:
        doc = copy.deepcopy(document)
        doc[ID_KEY] = document_id
        with self._locks.lock_for(namespace):
            self._collection(namespace)[document_id] = doc

    def find_by_id(self, namespace: str, document_id: Any) -> dict[str, Any] | None:
        with self._locks.lock_for(namespace):
            try:
                doc = self._collection(namespace).get(document_id)
            except TypeError:
                # unhashable ids can't be stored, so they can't be found either
                return None
            return copy.deepcopy(doc) if doc is not None else None

    def count(self, namespace: str) -> int:
        with self._locks.lock_for(namespace):
            return len(self._collection(namespace))

    def clear(self, namespace: str) -> None:
        with self._locks.lock_for(namespace):
            self._collections.pop(namespace, None)
        logger.debug("MEMORY STORE: cleared %s", namespace)

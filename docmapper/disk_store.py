from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .identity import ID_KEY, generate_id
from .interfaces import DocumentStore
from .json_store import atomic_write_json, read_json
from .locks import GLOBAL_PATH_LOCKS
from .paths import collection_path

logger = logging.getLogger(__name__)


class DiskDocumentStore(DocumentStore):
    """
    Stores each collection as a single JSON object on disk:

      <base>/<database>/<collection>.json  ->  { "<id>": {...document...} }

    - Missing or unparsable files read as an empty collection.
    - Every write rewrites the file atomically under a per-path lock.
    - JSON object keys are strings, so ids are indexed by `str(id)`; the
      document body keeps the original id value.
    """

    def __init__(self, base: Path):
        self._base = base

    @property
    def base(self) -> Path:
        return self._base

    def path_for(self, namespace: str) -> Path:
        return collection_path(self._base, namespace)

    def _load(self, path: Path) -> dict[str, Any]:
        raw = read_json(path)
        return raw if isinstance(raw, dict) else {}

    def insert(self, namespace: str, document: dict[str, Any]) -> Any:
        doc = dict(document)
        if doc.get(ID_KEY) is None:
            doc[ID_KEY] = generate_id()
        self._write(namespace, doc[ID_KEY], doc)
        return doc[ID_KEY]

    def update_by_id(self, namespace: str, document_id: Any, document: dict[str, Any]) -> None:
        doc = dict(document)
        doc[ID_KEY] = document_id
        self._write(namespace, document_id, doc)

    def _write(self, namespace: str, document_id: Any, doc: dict[str, Any]) -> None:
        path = self.path_for(namespace)
        with GLOBAL_PATH_LOCKS.lock_for(str(path.resolve())):
            data = self._load(path)
            data[str(document_id)] = doc
            atomic_write_json(path, data)

    def find_by_id(self, namespace: str, document_id: Any) -> dict[str, Any] | None:
        path = self.path_for(namespace)
        with GLOBAL_PATH_LOCKS.lock_for(str(path.resolve())):
            rec = self._load(path).get(str(document_id))
        return rec if isinstance(rec, dict) else None

    def count(self, namespace: str) -> int:
        path = self.path_for(namespace)
        with GLOBAL_PATH_LOCKS.lock_for(str(path.resolve())):
            return sum(1 for rec in self._load(path).values() if isinstance(rec, dict))

    def clear(self, namespace: str) -> None:
        path = self.path_for(namespace)
        with GLOBAL_PATH_LOCKS.lock_for(str(path.resolve())):
            atomic_write_json(path, {})
        logger.debug("DISK STORE: cleared %s", path)

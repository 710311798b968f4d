from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .disk_store import DiskDocumentStore
from .errors import ConfigurationError
from .interfaces import DocumentStore
from .memory_store import MemoryDocumentStore
from .settings import STORE_BACKENDS, Settings

logger = logging.getLogger(__name__)


class Connection:
    """
    Entry point onto a DocumentStore: `connection["db"]["collection"]`
    yields the Collection handle document classes persist through.
    """

    def __init__(self, store: DocumentStore | None = None, *, debug_log_documents: bool = False):
        self._store = store if store is not None else MemoryDocumentStore()
        self.debug_log_documents = debug_log_documents

    @classmethod
    def from_settings(cls, settings: Settings) -> "Connection":
        backend = settings.store_backend
        if backend == "memory":
            store: DocumentStore = MemoryDocumentStore()
        elif backend == "disk":
            store = DiskDocumentStore(settings.data_dir)
        elif backend == "mongo":
            from .mongo_store import MongoDocumentStore

            store = MongoDocumentStore(uri=settings.mongo_uri)
        else:
            raise ConfigurationError(f"unknown store backend {backend!r}; expected one of {', '.join(STORE_BACKENDS)}")
        logger.info("CONNECTION: using %s store", backend)
        return cls(store, debug_log_documents=settings.debug_log_documents)

    @property
    def store(self) -> DocumentStore:
        return self._store

    def database(self, name: str) -> "Database":
        return Database(self, name)

    __getitem__ = database

    def __repr__(self) -> str:
        return f"Connection({type(self._store).__name__})"


@dataclass(frozen=True)
class Database:
    connection: Connection
    name: str

    def collection(self, name: str) -> "Collection":
        return Collection(self, name)

    __getitem__ = collection


@dataclass(frozen=True)
class Collection:
    """
    One collection of one database. Value object: two handles are equal when
    they address the same connection, database and collection name.
    """

    database: Database
    name: str

    @property
    def namespace(self) -> str:
        return f"{self.database.name}.{self.name}"

    @property
    def _store(self) -> DocumentStore:
        return self.database.connection.store

    def _log_payload(self, op: str, document: dict[str, Any]) -> None:
        if self.database.connection.debug_log_documents:
            logger.debug("COLLECTION %s payload: %s %r", op, self.namespace, document)

    def insert(self, document: dict[str, Any]) -> Any:
        self._log_payload("INSERT", document)
        document_id = self._store.insert(self.namespace, document)
        logger.debug("COLLECTION INSERT: %s id=%s", self.namespace, document_id)
        return document_id

    def update_by_id(self, document_id: Any, document: dict[str, Any]) -> None:
        self._log_payload("UPDATE", document)
        self._store.update_by_id(self.namespace, document_id, document)
        logger.debug("COLLECTION UPDATE: %s id=%s", self.namespace, document_id)

    def find_by_id(self, document_id: Any) -> dict[str, Any] | None:
        doc = self._store.find_by_id(self.namespace, document_id)
        logger.debug("COLLECTION FIND: %s id=%s found=%s", self.namespace, document_id, doc is not None)
        return doc

    def count(self) -> int:
        return self._store.count(self.namespace)

    def clear(self) -> None:
        self._store.clear(self.namespace)
        logger.debug("COLLECTION CLEAR: %s", self.namespace)

from __future__ import annotations

import logging
from typing import Any

from bson import ObjectId
from pymongo import MongoClient

from .identity import ID_KEY, generate_id
from .interfaces import DocumentStore, split_namespace

logger = logging.getLogger(__name__)


def _to_mongo_id(document_id: Any) -> Any:
    # 24-hex ids are stored as real ObjectIds so other Mongo clients see
    # native identifiers; anything else is stored as given.
    if isinstance(document_id, str) and ObjectId.is_valid(document_id):
        return ObjectId(document_id)
    return document_id


class MongoDocumentStore(DocumentStore):
    """
    Thin adapter from the DocumentStore protocol onto a pymongo client.

    The client is created lazily by pymongo itself, so constructing the
    store does not open a connection.
    """

    def __init__(self, client: MongoClient | None = None, *, uri: str = "mongodb://localhost:27017"):
        self._client = client if client is not None else MongoClient(uri)

    @property
    def client(self) -> MongoClient:
        return self._client

    def _collection(self, namespace: str):
        database, collection = split_namespace(namespace)
        return self._client[database][collection]

    def insert(self, namespace: str, document: dict[str, Any]) -> Any:
        doc = dict(document)
        document_id = doc.get(ID_KEY)
        if document_id is None:
            document_id = generate_id()
        doc[ID_KEY] = _to_mongo_id(document_id)
        self._collection(namespace).insert_one(doc)
        return document_id

    def update_by_id(self, namespace: str, document_id: Any, document: dict[str, Any]) -> None:
        mongo_id = _to_mongo_id(document_id)
        doc = dict(document)
        doc[ID_KEY] = mongo_id
        self._collection(namespace).replace_one({ID_KEY: mongo_id}, doc, upsert=True)

    def find_by_id(self, namespace: str, document_id: Any) -> dict[str, Any] | None:
        doc = self._collection(namespace).find_one({ID_KEY: _to_mongo_id(document_id)})
        return dict(doc) if doc is not None else None

    def count(self, namespace: str) -> int:
        return self._collection(namespace).count_documents({})

    def clear(self, namespace: str) -> None:
        result = self._collection(namespace).delete_many({})
        logger.debug("MONGO STORE: cleared %s (%s removed)", namespace, getattr(result, "deleted_count", "?"))

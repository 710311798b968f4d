from __future__ import annotations

from .attributes import AttributeStore, IndifferentDict
from .coercion import coerce
from .config import configure, configure_from_env
from .connection import Collection, Connection, Database
from .disk_store import DiskDocumentStore
from .document import Document, document_class
from .errors import ArgumentError, ConfigurationError, DocumentNotFound, MapperError, NoSuchAttribute
from .identity import ID_KEY, generate_id
from .interfaces import DocumentStore
from .keys import Key
from .memory_store import MemoryDocumentStore
from .mongo_store import MongoDocumentStore
from .schema import SchemaRegistry, StoreBinding

__all__ = [
    "AttributeStore",
    "IndifferentDict",
    "coerce",
    "configure",
    "configure_from_env",
    "Collection",
    "Connection",
    "Database",
    "DiskDocumentStore",
    "Document",
    "document_class",
    "ArgumentError",
    "ConfigurationError",
    "DocumentNotFound",
    "MapperError",
    "NoSuchAttribute",
    "ID_KEY",
    "generate_id",
    "DocumentStore",
    "Key",
    "MemoryDocumentStore",
    "MongoDocumentStore",
    "SchemaRegistry",
    "StoreBinding",
]

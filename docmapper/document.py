from __future__ import annotations

import logging
import re
from typing import Any, ClassVar, Iterable, Mapping

from . import config
from .attributes import AttributeStore, IndifferentDict
from .connection import Collection, Connection, Database
from .errors import ArgumentError, DocumentNotFound, NoSuchAttribute
from .identity import ID_KEY, generate_id
from .keys import Key
from .schema import SchemaRegistry, StoreBinding, normalize_name

logger = logging.getLogger(__name__)


def pluralize(word: str) -> str:
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if len(word) > 1 and word.endswith("y") and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    return word + "s"


def tableize(class_name: str) -> str:
    """BlogPost -> blog_posts, Class -> classes."""
    snake = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", class_name)
    snake = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", snake)
    return pluralize(snake.lower())


def _check_key_name(name: str) -> str:
    # "id", "save", "attributes", ... would be shadowed by the Document member
    if name != ID_KEY and hasattr(Document, name):
        raise ArgumentError(f"key name {name!r} collides with a Document member")
    return name


def _merge(attributes: Any, extra: Mapping[str, Any]) -> dict[Any, Any]:
    if attributes is None:
        values: dict[Any, Any] = {}
    elif isinstance(attributes, Mapping):
        values = dict(attributes)
    else:
        raise ArgumentError(f"attributes must be a mapping, not {type(attributes).__name__}")
    values.update(extra)
    return values


class Document:
    """
    Base class for persisted documents.

    Subclassing composes the class: it gets its own key registry (seeded with
    the implicit "_id" key and any keys of a Document parent) and its own
    store binding. Keys can be declared in the class body or afterwards:

        class User(Document, collection="people"):
            fname = Key(str)
            age = Key(int, default=0)

        User.key("email", str)

    Declared keys read and write as plain attributes; values are coerced to
    the key's type on every write. Names that aren't declared keys raise
    NoSuchAttribute.
    """

    __schema__: ClassVar[SchemaRegistry]
    __binding__: ClassVar[StoreBinding]

    def __init_subclass__(
        cls,
        *,
        connection: Connection | None = None,
        database: str | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)

        inherited = getattr(cls, "__schema__", None)
        schema = inherited.copy() if inherited is not None else SchemaRegistry.for_document()
        for attr, value in list(vars(cls).items()):
            if isinstance(value, Key):
                schema.add(value.named(_check_key_name(value.name or attr)))
                delattr(cls, attr)

        cls.__schema__ = schema
        cls.__binding__ = StoreBinding(connection=connection, database_name=database, collection_name=collection)

    # ------------------------------------------------------------------ #
    # schema
    # ------------------------------------------------------------------ #
    @classmethod
    def key(cls, name: Any, type: Any = None, default: Any = None) -> Key:
        return cls.__schema__.declare(_check_key_name(normalize_name(name)), type, default)

    @classmethod
    def keys(cls) -> Mapping[str, Key]:
        return cls.__schema__.keys()

    @classmethod
    def timestamps(cls) -> tuple[Key, Key]:
        """Declare `created_at` and `updated_at` as datetime keys."""
        return cls.__schema__.declare_timestamps()

    # ------------------------------------------------------------------ #
    # store binding
    # ------------------------------------------------------------------ #
    @classmethod
    def connection(cls) -> Connection:
        conn = cls.__binding__.connection
        return conn if conn is not None else config.connection()

    @classmethod
    def set_connection(cls, connection: Connection) -> Connection:
        cls.__binding__ = cls.__binding__.override(connection=connection)
        return connection

    @classmethod
    def database(cls) -> Database:
        binding = cls.__binding__
        if binding.connection is None and binding.database_name is None:
            return config.database()
        return cls.connection().database(binding.database_name or config.database_name())

    @classmethod
    def set_database(cls, name: str) -> Database:
        cls.__binding__ = cls.__binding__.override(database_name=name)
        return cls.database()

    @classmethod
    def collection(cls) -> Collection:
        return cls.database().collection(cls.__binding__.collection_name or tableize(cls.__name__))

    @classmethod
    def set_collection(cls, name: str) -> Collection:
        cls.__binding__ = cls.__binding__.override(collection_name=name)
        return cls.collection()

    # ------------------------------------------------------------------ #
    # class-level persistence
    # ------------------------------------------------------------------ #
    @classmethod
    def create(cls, attributes: Any = None, **kwargs: Any):
        """
        Build, insert and return one document, or a list of documents when
        given a list of attribute mappings.
        """
        if isinstance(attributes, (list, tuple)):
            if kwargs:
                raise ArgumentError("keyword attributes can't be combined with a list of documents")
            return [cls(attrs).save() for attrs in attributes]
        return cls(attributes, **kwargs).save()

    @classmethod
    def update(cls, *args: Any):
        """
        update(id, attributes) -> document
        update({id: attributes, ...}) -> [document, ...]

        Only the given attributes change. Malformed arguments raise
        ArgumentError before anything is written.
        """
        if len(args) == 1:
            documents = args[0]
            if not isinstance(documents, Mapping):
                raise ArgumentError("updating multiple documents requires a mapping of ids to attributes")
            for document_id, attributes in documents.items():
                cls._check_update(document_id, attributes)
            return [cls._update_one(document_id, attributes) for document_id, attributes in documents.items()]
        if len(args) == 2:
            cls._check_update(*args)
            return cls._update_one(*args)
        raise ArgumentError(f"update() takes an id and attributes, or a mapping of ids to attributes ({len(args)} given)")

    @staticmethod
    def _check_update(document_id: Any, attributes: Any) -> None:
        if document_id is None or document_id == "":
            raise ArgumentError("updating a document requires an id")
        if not isinstance(attributes, Mapping):
            raise ArgumentError("updating a document requires a mapping of attributes")

    @classmethod
    def _update_one(cls, document_id: Any, attributes: Mapping[Any, Any]):
        return cls.find(document_id).update_attributes(attributes)

    @classmethod
    def find(cls, document_id: Any):
        doc = cls.find_by_id(document_id)
        if doc is None:
            raise DocumentNotFound(cls.collection().namespace, document_id)
        return doc

    @classmethod
    def find_by_id(cls, document_id: Any):
        lookup_id = cls.__schema__.resolve(ID_KEY).coerce(document_id)
        if lookup_id is None:
            return None
        raw = cls.collection().find_by_id(lookup_id)
        if raw is None:
            return None
        return cls.from_document(raw)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]):
        """Rehydrate a stored document. Declared defaults are not applied."""
        doc = cls.__new__(cls)
        store = AttributeStore(cls.__schema__, document, owner=cls.__name__, apply_defaults=False)
        object.__setattr__(doc, "_attributes", store)
        return doc

    # ------------------------------------------------------------------ #
    # instance
    # ------------------------------------------------------------------ #
    def __init__(self, attributes: Mapping[Any, Any] | None = None, **kwargs: Any):
        if type(self) is Document:
            raise TypeError("Document can't be instantiated directly; subclass it to declare keys")
        values = _merge(attributes, kwargs)
        object.__setattr__(self, "_attributes", AttributeStore(self.__schema__, values, owner=type(self).__name__))

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails, i.e. for key names
        store = self.__dict__.get("_attributes")
        if store is None or name.startswith("__") or not store.has_reader(name):
            raise NoSuchAttribute(type(self).__name__, name)
        return store.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
            return
        store = self.__dict__.get("_attributes")
        if store is not None and store.has_writer(name):
            store.set(name, value)
            return
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        raise NoSuchAttribute(type(self).__name__, name)

    def __delattr__(self, name: str) -> None:
        store = self.__dict__.get("_attributes")
        if store is not None and store.has_writer(name):
            store.set(name, None)
            return
        object.__delattr__(self, name)

    def __getitem__(self, name: Any) -> Any:
        return self._attributes.get(name)

    def __setitem__(self, name: Any, value: Any) -> None:
        self._attributes.set(name, value)

    def read_attribute(self, name: Any) -> Any:
        return self._attributes.get(name)

    def write_attribute(self, name: Any, value: Any) -> Any:
        return self._attributes.set(name, value)

    def has_reader(self, name: Any) -> bool:
        return self._attributes.has_reader(name)

    def has_writer(self, name: Any) -> bool:
        return self._attributes.has_writer(name)

    @property
    def id(self) -> Any:
        return self._attributes.get(ID_KEY)

    @id.setter
    def id(self, value: Any) -> None:
        self._attributes.set(ID_KEY, value)

    @property
    def attributes(self) -> IndifferentDict:
        """Every key with a non-None value, in declaration order."""
        return self._attributes.snapshot()

    @attributes.setter
    def attributes(self, values: Mapping[Any, Any]) -> None:
        if not isinstance(values, Mapping):
            raise ArgumentError(f"attributes must be a mapping, not {type(values).__name__}")
        self._attributes.assign(values)

    def to_document(self) -> dict[str, Any]:
        return dict(self._attributes.snapshot())

    def is_new_record(self) -> bool:
        """True until this document's id is present in its collection."""
        document_id = self.id
        if document_id is None:
            return True
        return self.collection().find_by_id(document_id) is None

    def save(self):
        collection = self.collection()
        if self.is_new_record():
            self._insert(collection)
        else:
            collection.update_by_id(self.id, self.to_document())
            logger.debug("DOCUMENT SAVE: updated %s id=%s", collection.namespace, self.id)
        return self

    def _insert(self, collection: Collection) -> None:
        document = self.to_document()
        # the id is only kept once the insert has gone through
        document[ID_KEY] = self.id if self.id is not None else generate_id()
        assigned = collection.insert(document)
        self._attributes.set(ID_KEY, assigned)
        logger.debug("DOCUMENT SAVE: inserted %s id=%s", collection.namespace, self.id)

    def update_attributes(self, attributes: Mapping[Any, Any] | None = None, **kwargs: Any):
        self.attributes = _merge(attributes, kwargs)
        return self.save()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.attributes.items())
        return f"{type(self).__name__}({fields})"


def document_class(name: str, keys: Iterable[tuple[Any, ...]] = (), **binding: Any) -> type[Document]:
    """
    Compose a Document subclass at runtime from `(name, type[, default])`
    tuples.
    """
    cls = type(name, (Document,), {}, **binding)
    for spec in keys:
        cls.key(*spec)
    return cls

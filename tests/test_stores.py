from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from bson import ObjectId

from docmapper import ConfigurationError, Connection, DiskDocumentStore, Document, Key, MemoryDocumentStore, MongoDocumentStore
from docmapper.interfaces import split_namespace

NS = "db.things"


@pytest.fixture(params=["memory", "disk"])
def store(request, tmp_path: Path):
    if request.param == "memory":
        return MemoryDocumentStore()
    return DiskDocumentStore(tmp_path / "data")


def test_store_contract(store):
    assert store.count(NS) == 0
    assert store.find_by_id(NS, "missing") is None

    new_id = store.insert(NS, {"name": "a"})
    assert isinstance(new_id, str) and len(new_id) == 24
    assert store.find_by_id(NS, new_id) == {"_id": new_id, "name": "a"}

    assert store.insert(NS, {"_id": "fixed", "name": "b"}) == "fixed"
    assert store.count(NS) == 2

    store.update_by_id(NS, "fixed", {"name": "c"})
    assert store.find_by_id(NS, "fixed") == {"_id": "fixed", "name": "c"}
    assert store.count(NS) == 2

    store.clear(NS)
    assert store.count(NS) == 0


def test_collections_are_isolated(store):
    store.insert("db.a", {"_id": "1"})
    assert store.count("db.b") == 0
    assert store.find_by_id("db.b", "1") is None


def test_memory_store_copies_documents():
    store = MemoryDocumentStore()
    doc = {"_id": "x", "tags": ["a"]}
    store.insert(NS, doc)
    doc["tags"].append("b")
    found = store.find_by_id(NS, "x")
    assert found == {"_id": "x", "tags": ["a"]}
    found["tags"].append("c")
    assert store.find_by_id(NS, "x")["tags"] == ["a"]


def test_disk_store_layout_and_datetimes(tmp_path: Path):
    store = DiskDocumentStore(tmp_path)
    when = datetime(2009, 5, 10, 12, 30)
    store.insert(NS, {"_id": 1, "at": when})

    path = tmp_path / "db" / "things.json"
    assert store.path_for(NS) == path
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"1": {"_id": 1, "at": "2009-05-10T12:30:00"}}
    assert store.find_by_id(NS, 1) == {"_id": 1, "at": "2009-05-10T12:30:00"}


def test_disk_store_treats_corrupt_file_as_empty(tmp_path: Path):
    store = DiskDocumentStore(tmp_path)
    path = store.path_for(NS)
    path.write_text("{not json", encoding="utf-8")
    assert store.count(NS) == 0
    store.insert(NS, {"_id": "a"})
    assert store.count(NS) == 1


def test_documents_round_trip_through_disk(tmp_path: Path):
    conn = Connection(DiskDocumentStore(tmp_path))

    class Event(Document, connection=conn):
        title = Key(str)
        starts_at = Key(datetime)
        seats = Key(int)

    event = Event.create(title="Launch", starts_at="2009-05-10T12:30:00", seats="40")
    found = Event.find(event.id)
    assert found.starts_at == datetime(2009, 5, 10, 12, 30)
    assert found.attributes == event.attributes
    assert (tmp_path / "docmapper" / "events.json").exists()


@pytest.mark.parametrize("bad", ["nodot", ".things", "db.", ""])
def test_split_namespace_rejects_malformed(bad):
    with pytest.raises(ConfigurationError):
        split_namespace(bad)


def test_split_namespace():
    assert split_namespace("db.things.archive") == ("db", "things.archive")


class _FakeResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


class _FakeCollection:
    def __init__(self) -> None:
        self.docs: dict[Any, dict[str, Any]] = {}

    def insert_one(self, doc):
        self.docs[doc["_id"]] = dict(doc)

    def replace_one(self, flt, doc, upsert=False):
        assert upsert is True
        self.docs[flt["_id"]] = dict(doc)

    def find_one(self, flt):
        doc = self.docs.get(flt["_id"])
        return dict(doc) if doc is not None else None

    def count_documents(self, flt):
        return len(self.docs)

    def delete_many(self, flt):
        n = len(self.docs)
        self.docs.clear()
        return _FakeResult(n)


class _FakeClient:
    def __init__(self) -> None:
        self.databases: dict[str, dict[str, _FakeCollection]] = {}

    def __getitem__(self, name):
        return _FakeDatabase(self.databases.setdefault(name, {}))


class _FakeDatabase:
    def __init__(self, collections):
        self._collections = collections

    def __getitem__(self, name):
        return self._collections.setdefault(name, _FakeCollection())


def test_mongo_store_stores_native_object_ids():
    client = _FakeClient()
    store = MongoDocumentStore(client)  # type: ignore[arg-type]

    new_id = store.insert(NS, {"name": "a"})
    raw = client.databases["db"]["things"].docs
    assert list(raw) == [ObjectId(new_id)]

    found = store.find_by_id(NS, new_id)
    assert found == {"_id": ObjectId(new_id), "name": "a"}

    store.update_by_id(NS, new_id, {"name": "b"})
    assert store.find_by_id(NS, new_id)["name"] == "b"
    assert store.count(NS) == 1

    store.insert(NS, {"_id": 7})
    assert store.find_by_id(NS, 7) == {"_id": 7}

    store.clear(NS)
    assert store.count(NS) == 0


def test_documents_over_mongo_store_get_string_ids():
    conn = Connection(MongoDocumentStore(_FakeClient()))  # type: ignore[arg-type]

    class Account(Document, connection=conn):
        owner = Key(str)

    account = Account.create(owner="ann")
    found = Account.find(account.id)
    assert isinstance(found.id, str)
    assert found == account
    assert Account.find(ObjectId(account.id)) == account

from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable

import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import docmapper` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch: pytest.MonkeyPatch):
    """
    Every test starts from an empty in-memory default connection, whatever the
    developer's environment says.
    """
    from docmapper import config

    for name in (
        "DOCMAPPER_STORE",
        "DOCMAPPER_DATABASE",
        "DOCMAPPER_DATA_DIR",
        "DOCMAPPER_MONGO_URI",
        "DOCMAPPER_DEBUG_LOG_DOCUMENTS",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reset()
    yield
    config.reset()


@pytest.fixture
def sandbox_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect the default data directory to a temp dir so tests never touch real ./data.
    """
    import docmapper.paths as paths

    data = tmp_path / "data"

    def _data_dir() -> Path:
        return data

    monkeypatch.setattr(paths, "data_dir", _data_dir)
    return data


@pytest.fixture
def make_document() -> Callable[..., type]:
    """
    Build a throwaway Document subclass, the way an application would declare one.
    """
    from docmapper import document_class

    def _make(name: str = "Class", keys=(), **binding):
        return document_class(name, keys, **binding)

    return _make


@pytest.fixture
def person(make_document):
    cls = make_document("Person", [("name", str), ("age", int)])
    cls.collection().clear()
    return cls


@pytest.fixture
def user(make_document):
    cls = make_document("User", [("fname", str), ("lname", str), ("age", int)], collection="users")
    cls.collection().clear()
    return cls

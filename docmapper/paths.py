from __future__ import annotations

from pathlib import Path

from .interfaces import split_namespace


def project_root() -> Path:
    # docmapper/paths.py -> docmapper -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    return project_root() / "data"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def database_dir(base: Path, database: str) -> Path:
    return ensure_dir(base / database)


def collection_path(base: Path, namespace: str) -> Path:
    database, collection = split_namespace(namespace)
    return database_dir(base, database) / f"{collection}.json"

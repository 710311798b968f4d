from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from . import paths

STORE_BACKENDS = ("memory", "disk", "mongo")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Store backend: one of STORE_BACKENDS
    store_backend: str
    database_name: str

    # Disk backend
    data_dir: Path

    # Mongo backend
    mongo_uri: str

    # Debug
    debug_log_documents: bool


def get_settings() -> Settings:
    store_backend = os.getenv("DOCMAPPER_STORE", "memory").strip().lower() or "memory"
    database_name = os.getenv("DOCMAPPER_DATABASE", "docmapper").strip() or "docmapper"

    raw_data_dir = os.getenv("DOCMAPPER_DATA_DIR", "").strip()
    data_dir = Path(raw_data_dir).expanduser() if raw_data_dir else paths.data_dir()

    mongo_uri = os.getenv("DOCMAPPER_MONGO_URI", "mongodb://localhost:27017").strip()

    # Full document payloads can hold personal data; keep them out of logs by default.
    debug_log_documents = _env_bool("DOCMAPPER_DEBUG_LOG_DOCUMENTS", False)

    return Settings(
        store_backend=store_backend,
        database_name=database_name,
        data_dir=data_dir,
        mongo_uri=mongo_uri,
        debug_log_documents=debug_log_documents,
    )

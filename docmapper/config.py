"""
Process-wide default connection and database.

Document classes without their own override resolve these on every access,
so `configure()` takes effect for all such classes at once. Class-level
overrides never write back here.
"""
from __future__ import annotations

import logging
import threading

from dotenv import load_dotenv

from .connection import Connection, Database
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_settings: Settings | None = None
_connection: Connection | None = None
_database_name: str | None = None


def settings() -> Settings:
    global _settings
    with _lock:
        if _settings is None:
            _settings = get_settings()
        return _settings


def connection() -> Connection:
    global _connection
    current = settings()
    with _lock:
        if _connection is None:
            _connection = Connection.from_settings(current)
        return _connection


def database_name() -> str:
    return _database_name or settings().database_name


def database() -> Database:
    return connection().database(database_name())


def configure(*, connection: Connection | None = None, database: str | None = None) -> None:
    """Replace the default connection and/or database name."""
    global _connection, _database_name
    with _lock:
        if connection is not None:
            _connection = connection
        if database is not None:
            _database_name = database
    logger.info("CONFIG: default connection=%r database=%s", _connection, _database_name)


def configure_from_env(env_file: str = "local.env") -> Settings:
    """Load `env_file` into the environment and rebuild the defaults from it."""
    load_dotenv(env_file)
    reset()
    return settings()


def reset() -> None:
    """Forget cached settings and defaults; the next access rebuilds them."""
    global _settings, _connection, _database_name
    with _lock:
        _settings = None
        _connection = None
        _database_name = None

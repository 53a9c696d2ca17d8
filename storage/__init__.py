"""
Модуль: `storage/__init__.py`.
Назначение: Выбор хранилища контактов по конфигурации.

Выбор делается один раз при запуске: при заданном DATABASE_URL используется
PostgreSQL, иначе файл SQLite. Остальной код работает только с ContactStore.
"""

import os

from .base import ChangeResult, ContactStore, SqlContactStore, StorageError
from .postgres import PostgresContactStore
from .sqlite import SqliteContactStore


def build_store(config) -> ContactStore:
    """Создаёт хранилище по словарю конфигурации приложения."""
    strict = config.get("SCHEMA_INIT_STRICT", True)

    database_url = config.get("DATABASE_URL")
    if database_url:
        return PostgresContactStore(
            database_url,
            sslmode=config.get("DATABASE_SSLMODE", "prefer"),
            sslrootcert=config.get("DATABASE_SSLROOTCERT"),
            pool_size=config.get("DATABASE_POOL_SIZE", 5),
            strict=strict,
        )

    path = os.path.join(config["SQLITE_DIR"], config.get("SQLITE_FILENAME", "database.sqlite"))
    return SqliteContactStore(path, strict=strict)


__all__ = [
    "ChangeResult",
    "ContactStore",
    "PostgresContactStore",
    "SqlContactStore",
    "SqliteContactStore",
    "StorageError",
    "build_store",
]

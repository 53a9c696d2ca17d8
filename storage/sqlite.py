"""
Модуль: `storage/sqlite.py`.
Назначение: Встроенное файловое хранилище контактов на SQLite.
"""

from __future__ import annotations

import os

from .base import SqlContactStore


class SqliteContactStore(SqlContactStore):
    """Хранилище контактов в одном файле SQLite."""

    backend_name = "sqlite"

    def __init__(self, path: str, strict: bool = True):
        super().__init__(strict=strict)
        self.path = os.path.abspath(path)

    def prepare(self) -> None:
        # Каталог может не существовать (например, при SQLITE_DIR во временной папке)
        os.makedirs(os.path.dirname(self.path), exist_ok=True)

    def database_uri(self) -> str:
        return f"sqlite:///{self.path}"

    def engine_options(self) -> dict:
        # Соединения используются из разных потоков сервера
        return {"connect_args": {"check_same_thread": False, "timeout": 15}}

    def describe(self) -> str:
        return f"{self.backend_name} {self.path}"

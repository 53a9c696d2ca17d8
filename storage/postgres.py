"""
Модуль: `storage/postgres.py`.
Назначение: Сетевое хранилище контактов на PostgreSQL (драйвер psycopg2, пул соединений).
"""

from __future__ import annotations

from sqlalchemy.engine import make_url

from .base import SqlContactStore

DRIVER_SCHEME = "postgresql+psycopg2"


def normalize_database_url(url: str) -> str:
    """Приводит `postgres://` и `postgresql://` к схеме с драйвером psycopg2."""
    url = url.strip()
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return f"{DRIVER_SCHEME}://" + url[len(prefix):]
    return url


class PostgresContactStore(SqlContactStore):
    """Хранилище контактов в PostgreSQL."""

    backend_name = "postgresql"

    def __init__(
        self,
        database_url: str,
        sslmode: str = "prefer",
        sslrootcert: str | None = None,
        pool_size: int = 5,
        strict: bool = True,
    ):
        super().__init__(strict=strict)
        if not database_url:
            raise ValueError("database_url is required for PostgreSQL storage")
        self.database_url = normalize_database_url(database_url)
        self.sslmode = sslmode
        self.sslrootcert = sslrootcert
        self.pool_size = max(1, pool_size)

    def database_uri(self) -> str:
        return self.database_url

    def engine_options(self) -> dict:
        connect_args = {"sslmode": self.sslmode}
        if self.sslrootcert:
            connect_args["sslrootcert"] = self.sslrootcert
        return {
            "pool_size": self.pool_size,
            "pool_pre_ping": True,
            "connect_args": connect_args,
        }

    def describe(self) -> str:
        url = make_url(self.database_url)
        return f"{self.backend_name} {url.host or 'localhost'}/{url.database or ''} (sslmode={self.sslmode})"

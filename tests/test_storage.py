import os
from datetime import datetime

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app import create_app
from conftest import make_config
from extensions import db
from models.contact import Contact
from storage import (
    ChangeResult,
    PostgresContactStore,
    SqliteContactStore,
    StorageError,
    build_store,
)
from storage.base import MAX_CONTACT_ID
from storage.postgres import normalize_database_url


def test_sqlite_store_crud_contract(app, store):
    with app.app_context():
        first = store.create("Ann", "111", "ann@example.com")
        second = store.create("Ben", "222", "ben@example.com")
        assert first.id != second.id
        assert first.created_at is not None

        listed = store.list_all()
        assert [c.id for c in listed] == [second.id, first.id]
        assert listed[0].created_at >= listed[1].created_at

        assert store.update(first.id, "Anna", "333", "anna@example.com") == ChangeResult(1)
        updated = next(c for c in store.list_all() if c.id == first.id)
        assert (updated.name, updated.phone, updated.email) == ("Anna", "333", "anna@example.com")
        assert updated.created_at == first.created_at

        assert store.update(9999, "X", "1", "x@y.z").changed_count == 0
        assert store.delete(9999).found is False
        assert store.delete(second.id).found is True
        assert [c.id for c in store.list_all()] == [first.id]


def test_list_all_orders_by_created_at_not_id(app, store):
    with app.app_context():
        newer = Contact(name="Ann", phone="111", email="ann@example.com", created_at=datetime(2025, 1, 1))
        db.session.add(newer)
        db.session.commit()
        older = Contact(name="Ben", phone="222", email="ben@example.com", created_at=datetime(2020, 1, 1))
        db.session.add(older)
        db.session.commit()
        assert older.id > newer.id

        assert [c.id for c in store.list_all()] == [newer.id, older.id]


@pytest.mark.parametrize("contact_id", [0, -1, MAX_CONTACT_ID + 1, 10**20])
def test_out_of_range_ids_are_not_found(app, store, contact_id):
    with app.app_context():
        store.create("Ann", "111", "ann@example.com")
        assert store.update(contact_id, "X", "1", "x@y.z") == ChangeResult(0)
        assert store.delete(contact_id) == ChangeResult(0)
        assert len(store.list_all()) == 1


def test_initialize_is_idempotent(app, store):
    with app.app_context():
        store.create("Ann", "111", "ann@example.com")
        assert store.initialize() is True
        assert len(store.list_all()) == 1


def test_sqlite_file_is_created_in_configured_dir(tmp_path):
    target = tmp_path / "nested" / "dir"
    app = create_app(make_config(tmp_path, SQLITE_DIR=str(target)))
    try:
        store = app.extensions["contact_store"]
        assert isinstance(store, SqliteContactStore)
        assert os.path.exists(os.path.join(target, "contacts-test.sqlite"))
    finally:
        app.extensions["contact_store"].close()


def test_query_errors_are_wrapped_as_storage_error(app, store):
    with app.app_context():
        db.session.execute(text("DROP TABLE contacts"))
        db.session.commit()

        with pytest.raises(StorageError):
            store.create("Ann", "111", "ann@example.com")
        with pytest.raises(StorageError):
            store.list_all()
        with pytest.raises(StorageError):
            store.delete(1)


def test_schema_failure_aborts_startup_when_strict(tmp_path, monkeypatch):
    def _broken_create_all(*args, **kwargs):
        raise OperationalError("CREATE TABLE", {}, Exception("read-only"))

    monkeypatch.setattr(db, "create_all", _broken_create_all)
    with pytest.raises(StorageError):
        create_app(make_config(tmp_path))


def test_schema_failure_is_logged_when_not_strict(tmp_path, monkeypatch, caplog):
    def _broken_create_all(*args, **kwargs):
        raise OperationalError("CREATE TABLE", {}, Exception("read-only"))

    monkeypatch.setattr(db, "create_all", _broken_create_all)
    app = create_app(make_config(tmp_path, SCHEMA_INIT_STRICT=False))
    try:
        assert app is not None
        assert "contacts" in caplog.text
    finally:
        app.extensions["contact_store"].close()


def test_close_is_safe_before_init_app(tmp_path):
    SqliteContactStore(str(tmp_path / "unused.sqlite")).close()


def test_injected_store_is_used(tmp_path):
    store = SqliteContactStore(str(tmp_path / "injected.sqlite"))
    app = create_app(make_config(tmp_path), store=store)
    try:
        assert app.extensions["contact_store"] is store
        assert app.config["SQLALCHEMY_DATABASE_URI"].endswith("injected.sqlite")
    finally:
        store.close()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db.local:5432/app", "postgresql+psycopg2://u:p@db.local:5432/app"),
        ("postgresql://u:p@db.local/app", "postgresql+psycopg2://u:p@db.local/app"),
        ("postgresql+psycopg2://u@db.local/app", "postgresql+psycopg2://u@db.local/app"),
    ],
)
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected


def test_postgres_engine_options_keep_certificate_checks():
    store = PostgresContactStore(
        "postgres://u:p@db.local/app",
        sslmode="verify-full",
        sslrootcert="/etc/ssl/ca.pem",
        pool_size=3,
    )
    options = store.engine_options()
    assert options["pool_size"] == 3
    assert options["pool_pre_ping"] is True
    assert options["connect_args"] == {"sslmode": "verify-full", "sslrootcert": "/etc/ssl/ca.pem"}
    assert "p@" not in store.describe()


def test_postgres_store_requires_url():
    with pytest.raises(ValueError):
        PostgresContactStore("")


def test_build_store_prefers_database_url(tmp_path):
    config = {
        "DATABASE_URL": "postgres://u:p@db.local/app",
        "DATABASE_SSLMODE": "require",
        "DATABASE_POOL_SIZE": 2,
        "SQLITE_DIR": str(tmp_path),
        "SCHEMA_INIT_STRICT": False,
    }
    store = build_store(config)
    assert isinstance(store, PostgresContactStore)
    assert store.sslmode == "require"
    assert store.pool_size == 2
    assert store.strict is False


def test_build_store_falls_back_to_sqlite(tmp_path):
    store = build_store({"DATABASE_URL": None, "SQLITE_DIR": str(tmp_path), "SQLITE_FILENAME": "c.sqlite"})
    assert isinstance(store, SqliteContactStore)
    assert store.path == os.path.join(str(tmp_path), "c.sqlite")

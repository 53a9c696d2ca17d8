"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: storage/base.py – контракт хранилища контактов.

Назначение модуля:
- Абстрактный интерфейс ContactStore, от которого зависят маршруты.
- Общая реализация операций CRUD поверх Flask-SQLAlchemy (SqlContactStore).
- Единый тип ошибки хранилища StorageError.

Бэкенды (PostgreSQL, SQLite) отличаются только строкой подключения,
параметрами движка и подготовкой окружения.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.contact import Contact

logger = logging.getLogger(__name__)

# Диапазон INTEGER PRIMARY KEY в SQLite и BIGINT в PostgreSQL
MAX_CONTACT_ID = 2**63 - 1


def _is_valid_contact_id(contact_id) -> bool:
    return isinstance(contact_id, int) and 1 <= contact_id <= MAX_CONTACT_ID


class StorageError(Exception):
    """Ошибка подключения к БД или выполнения запроса."""


@dataclass(frozen=True)
class ChangeResult:
    """Результат изменения: сколько строк затронул запрос."""
    changed_count: int

    @property
    def found(self) -> bool:
        return self.changed_count > 0


class ContactStore(ABC):
    """Интерфейс хранилища контактов."""

    backend_name = "abstract"

    @abstractmethod
    def init_app(self, app: Flask) -> None:
        """Привязывает хранилище к приложению до инициализации db."""

    @abstractmethod
    def initialize(self) -> bool:
        """Идемпотентно создаёт таблицу `contacts`."""

    @abstractmethod
    def create(self, name: str, phone: str, email: str) -> Contact:
        """Сохраняет контакт и возвращает запись с `id` и `created_at`."""

    @abstractmethod
    def list_all(self) -> list[Contact]:
        """Возвращает все контакты, новые первыми."""

    @abstractmethod
    def update(self, contact_id: int, name: str, phone: str, email: str) -> ChangeResult:
        """Перезаписывает все изменяемые поля контакта."""

    @abstractmethod
    def delete(self, contact_id: int) -> ChangeResult:
        """Удаляет контакт по идентификатору."""

    @abstractmethod
    def close(self) -> None:
        """Освобождает соединения с БД."""


class SqlContactStore(ContactStore):
    """Общая SQL-реализация контракта поверх db.session."""

    def __init__(self, strict: bool = True):
        self.strict = strict
        self._app: Flask | None = None

    @abstractmethod
    def database_uri(self) -> str:
        """Строка подключения SQLAlchemy."""

    def engine_options(self) -> dict:
        return {}

    def prepare(self) -> None:
        """Подготовка окружения бэкенда перед созданием движка."""

    def describe(self) -> str:
        """Описание хранилища для логов (без учётных данных)."""
        return self.backend_name

    def init_app(self, app: Flask) -> None:
        self.prepare()
        app.config["SQLALCHEMY_DATABASE_URI"] = self.database_uri()
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = self.engine_options()
        app.extensions["contact_store"] = self
        self._app = app
        logger.info("Хранилище контактов: %s", self.describe())

    def initialize(self) -> bool:
        try:
            db.create_all()
        except SQLAlchemyError as exc:
            logger.exception("Ошибка создания таблицы contacts (%s)", self.backend_name)
            if self.strict:
                raise StorageError("Failed to initialize contacts table") from exc
            return False
        logger.info("Таблица contacts готова (%s)", self.backend_name)
        return True

    @contextmanager
    def _transaction(self, action: str):
        """Откатывает сессию и переводит ошибки SQLAlchemy в StorageError."""
        try:
            yield
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageError(f"Failed to {action}") from exc

    def create(self, name: str, phone: str, email: str) -> Contact:
        with self._transaction("create contact"):
            contact = Contact(name=name, phone=phone, email=email)
            db.session.add(contact)
            db.session.commit()
            db.session.refresh(contact)
        return contact

    def list_all(self) -> list[Contact]:
        with self._transaction("list contacts"):
            return (
                Contact.query
                .order_by(Contact.created_at.desc(), Contact.id.desc())
                .all()
            )

    def update(self, contact_id: int, name: str, phone: str, email: str) -> ChangeResult:
        if not _is_valid_contact_id(contact_id):
            return ChangeResult(changed_count=0)
        with self._transaction("update contact"):
            changed = Contact.query.filter_by(id=contact_id).update(
                {
                    Contact.name: name,
                    Contact.phone: phone,
                    Contact.email: email,
                },
                synchronize_session=False,
            )
            db.session.commit()
        return ChangeResult(changed_count=changed)

    def delete(self, contact_id: int) -> ChangeResult:
        if not _is_valid_contact_id(contact_id):
            return ChangeResult(changed_count=0)
        with self._transaction("delete contact"):
            changed = Contact.query.filter_by(id=contact_id).delete(synchronize_session=False)
            db.session.commit()
        return ChangeResult(changed_count=changed)

    def close(self) -> None:
        if self._app is None:
            return
        try:
            with self._app.app_context():
                db.engine.dispose()
        except Exception:
            logger.exception("Ошибка закрытия соединения с БД (%s)", self.backend_name)
            return
        logger.info("Соединение с БД закрыто (%s)", self.backend_name)

"""
Модуль: `utils/contact_validator.py`.
Назначение: Проверка полей контакта перед сохранением или изменением.
"""

from __future__ import annotations

import re
from typing import Mapping, NamedTuple

from flask_babel import gettext as _

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CONTACT_FIELDS = ("name", "phone", "email")


class ContactPayload(NamedTuple):
    name: str
    phone: str
    email: str


def _clean(value) -> str:
    """Обрезает пробелы; значения не-строкового типа считаются пустыми."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def is_valid_email(value: str | None) -> bool:
    """Простейшая синтаксическая проверка вида `local@domain.tld`."""
    if not value:
        return False
    return EMAIL_RE.match(value) is not None


def validate_contact_payload(data: Mapping | None) -> tuple[ContactPayload | None, str | None]:
    """Возвращает (очищенные поля, None) или (None, текст ошибки)."""
    if not isinstance(data, Mapping):
        data = {}

    cleaned = {field: _clean(data.get(field)) for field in CONTACT_FIELDS}
    if not all(cleaned.values()):
        return None, _("Пожалуйста, заполните все поля")

    if not is_valid_email(cleaned["email"]):
        return None, _("Некорректный формат email")

    return ContactPayload(**cleaned), None

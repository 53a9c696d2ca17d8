"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: config.py – конфигурация приложения.

Назначение модуля:
- Определение базовых параметров приложения Flask (секретный ключ, пароль администратора).
- Выбор хранилища: строка подключения PostgreSQL или файл SQLite.
- Параметры сессии, CORS, языков интерфейса и логирования.
"""

import os
import tempfile
from datetime import timedelta

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Преобразует переменную окружения в bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Преобразует переменную окружения в int."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str] | None = None) -> list[str]:
    """Преобразует переменную окружения вида 'a,b,c' в список."""
    value = os.environ.get(name)
    if value is None:
        return list(default or [])
    return [item.strip() for item in value.split(",") if item.strip()]


def _is_production() -> bool:
    """Определяет production-режим по FLASK_ENV."""
    return os.environ.get("FLASK_ENV", "").strip().lower() == "production"


class Config:
    """Базовая конфигурация приложения."""

    PRODUCTION = _is_production()

    # Обязательные секреты: без них create_app() не запустится
    SECRET_KEY = os.environ.get("SECRET_KEY")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")

    HOST = os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"
    PORT = _get_env_int("PORT", 3000)

    DATABASE_URL = (os.environ.get("DATABASE_URL") or os.environ.get("POSTGRES_URL") or "").strip() or None
    DATABASE_SSLMODE = os.environ.get("DATABASE_SSLMODE", "verify-full" if PRODUCTION else "prefer").strip()
    DATABASE_SSLROOTCERT = os.environ.get("DATABASE_SSLROOTCERT", "").strip() or None
    DATABASE_POOL_SIZE = _get_env_int("DATABASE_POOL_SIZE", 5)

    SQLITE_DIR = os.environ.get("SQLITE_DIR", "").strip() or (tempfile.gettempdir() if PRODUCTION else BASE_DIR)
    SQLITE_FILENAME = os.environ.get("SQLITE_FILENAME", "database.sqlite").strip() or "database.sqlite"
    SCHEMA_INIT_STRICT = _get_env_bool("SCHEMA_INIT_STRICT", default=True)

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = _get_env_bool("SESSION_COOKIE_SECURE", default=PRODUCTION)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
    REMEMBER_COOKIE_HTTPONLY = True

    CORS_ENABLED = _get_env_bool("CORS_ENABLED", default=False)
    CORS_ORIGINS = _get_env_list(
        "CORS_ORIGINS",
        default=[
            "http://127.0.0.1:3000",
            "http://localhost:3000",
        ],
    )

    SUPPORTED_LANGUAGES = ("ru", "en")
    DEFAULT_LANGUAGE = os.environ.get("DEFAULT_LANGUAGE", "ru").strip().lower() or "ru"
    LANG_COOKIE_NAME = os.environ.get("LANG_COOKIE_NAME", "site_lang").strip() or "site_lang"
    LANG_COOKIE_MAX_AGE = _get_env_int("LANG_COOKIE_MAX_AGE", 31536000)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "text").strip().lower() or "text"


REQUIRED_SETTINGS = ("SECRET_KEY", "ADMIN_PASSWORD")


def validate_config(config) -> None:
    """Проверяет наличие обязательных секретов, иначе прерывает запуск."""
    missing = [name for name in REQUIRED_SETTINGS if not config.get(name)]
    if missing:
        raise RuntimeError(
            "Missing required configuration: "
            + ", ".join(missing)
            + ". Set the environment variables before starting the app."
        )

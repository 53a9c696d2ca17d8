"""
Модуль: `models/__init__.py`.
Назначение: Импорт моделей для корректной регистрации в SQLAlchemy metadata.
"""

from .admin import AdminUser
from .contact import Contact

__all__ = ["AdminUser", "Contact"]

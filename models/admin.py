"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: models/admin.py – единственный администратор системы.

Учётных записей в БД нет: администратор один, вход по общему паролю.
Flask-Login хранит в сессии только его идентификатор.
"""

from flask_login import UserMixin


class AdminUser(UserMixin):
    """Администратор, прошедший проверку общего пароля."""

    id = "admin"

    def get_id(self) -> str:
        return self.id

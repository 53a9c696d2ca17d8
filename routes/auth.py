"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: routes/auth.py – вход и выход администратора.

Назначение модуля:
- Проверка общего пароля администратора и открытие сессии Flask-Login.
- Завершение сессии.
- Загрузка администратора по идентификатору из сессии.
"""

import hmac

from flask import current_app, jsonify, request, session
from flask_babel import gettext as _
from flask_login import login_user, logout_user

from extensions import login_manager
from models.admin import AdminUser
from routes.api import api_error


@login_manager.user_loader
def load_user(user_id):
    if user_id == AdminUser.id:
        return AdminUser()
    return None


def _password_matches(provided, expected: str) -> bool:
    if not isinstance(provided, str) or not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def register_routes(app):
    @app.post("/api/admin/login")
    def admin_login():
        data = request.get_json(silent=True)
        if data is None:
            data = request.form
        password = data.get("password") if hasattr(data, "get") else None

        if not _password_matches(password, current_app.config["ADMIN_PASSWORD"]):
            current_app.logger.warning("Неудачная попытка входа администратора с %s", request.remote_addr)
            return api_error(_("Неверный пароль"), 401)

        # Сессия живёт PERMANENT_SESSION_LIFETIME (24 часа)
        session.permanent = True
        login_user(AdminUser())
        current_app.logger.info("Администратор вошёл в систему с %s", request.remote_addr)
        return jsonify({"success": True, "message": _("Вход выполнен успешно")})

    @app.post("/api/admin/logout")
    def admin_logout():
        try:
            logout_user()
            session.clear()
        except Exception:
            current_app.logger.exception("Ошибка завершения сессии администратора")
            return api_error(_("Ошибка при выходе из системы"), 500)

        return jsonify({"success": True, "message": _("Выход выполнен успешно")})

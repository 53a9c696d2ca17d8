"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: routes/api.py – REST-подобные API-маршруты контактов.

Назначение модуля:
- Приём контактов из публичной формы (без авторизации).
- Просмотр, изменение и удаление контактов администратором.
- Перевод ошибок хранилища в коды HTTP 404/500 без раскрытия подробностей.
"""

from flask import current_app, jsonify, request
from flask_babel import gettext as _
from flask_login import login_required

from storage import ContactStore, StorageError
from utils.contact_validator import validate_contact_payload


def api_error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def _request_data():
    """Тело запроса: JSON или данные формы."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form
    return data


def _store() -> ContactStore:
    return current_app.extensions["contact_store"]


def register_routes(app):
    @app.post("/api/contacts")
    def create_contact():
        """Сохраняет контакт из публичной формы."""
        payload, error = validate_contact_payload(_request_data())
        if error:
            return api_error(error, 400)

        try:
            contact = _store().create(payload.name, payload.phone, payload.email)
        except StorageError:
            current_app.logger.exception("Ошибка сохранения контакта")
            return api_error(_("Ошибка при сохранении данных"), 500)

        return jsonify(
            {
                "success": True,
                "message": _("Данные успешно сохранены"),
                "data": contact.to_dict(),
            }
        )

    @app.get("/api/contacts")
    @login_required
    def list_contacts():
        try:
            contacts = _store().list_all()
        except StorageError:
            current_app.logger.exception("Ошибка загрузки списка контактов")
            return api_error(_("Ошибка при загрузке данных"), 500)

        return jsonify([contact.to_dict() for contact in contacts])

    @app.put("/api/contacts/<int:contact_id>")
    @login_required
    def update_contact(contact_id: int):
        """Перезаписывает имя, телефон и email контакта целиком."""
        payload, error = validate_contact_payload(_request_data())
        if error:
            return api_error(error, 400)

        try:
            result = _store().update(contact_id, payload.name, payload.phone, payload.email)
        except StorageError:
            current_app.logger.exception("Ошибка изменения контакта %s", contact_id)
            return api_error(_("Ошибка при изменении данных"), 500)

        if not result.found:
            return api_error(_("Контакт для изменения не найден"), 404)

        return jsonify({"success": True, "message": _("Данные успешно изменены")})

    @app.delete("/api/contacts/<int:contact_id>")
    @login_required
    def delete_contact(contact_id: int):
        try:
            result = _store().delete(contact_id)
        except StorageError:
            current_app.logger.exception("Ошибка удаления контакта %s", contact_id)
            return api_error(_("Ошибка при удалении данных"), 500)

        if not result.found:
            return api_error(_("Контакт для удаления не найден"), 404)

        return jsonify({"success": True, "message": _("Данные успешно удалены")})

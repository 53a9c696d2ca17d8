"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: routes/pages.py – маршруты HTML-страниц.
"""

from flask import render_template
from flask_login import login_required


def register_routes(app):
    @app.get("/")
    def index():
        """Публичная форма отправки контакта."""
        return render_template("index.html")

    @app.get("/login")
    def login():
        return render_template("login.html")

    @app.get("/admin")
    @login_required
    def admin():
        """Таблица контактов для администратора."""
        return render_template("admin.html")

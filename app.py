"""
Название: «Контакты»
Язык: Python (Flask)
Краткое описание: веб-приложение для сбора контактов через публичную форму
и их администрирования (просмотр, изменение, удаление) по общему паролю
"""

import logging
import signal
import sys

from flask import (
    Flask,
    g,
    redirect,
    request,
    url_for,
)
from flask_babel import gettext as _
from werkzeug.exceptions import HTTPException

from config import Config, validate_config
from extensions import db, login_manager, cors, babel
import models  # noqa: F401 - регистрирует модели для db.create_all()
from routes.api import api_error, register_routes as register_api_routes
from routes.auth import register_routes as register_auth_routes
from routes.pages import register_routes as register_page_routes
from storage import ContactStore, build_store
from utils.i18n import is_supported_language, resolve_request_language
from utils.logging_config import setup_logging
from utils.network import build_startup_urls

logger = logging.getLogger(__name__)


def create_app(config_object=None, store: ContactStore | None = None) -> Flask:
    """Фабрика приложения: конфигурация, хранилище, расширения и маршруты."""
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    validate_config(app.config)

    # Хранилище выбирается один раз и задаёт параметры движка до db.init_app()
    store = store or build_store(app.config)
    store.init_app(app)

    db.init_app(app)
    login_manager.init_app(app)

    def select_locale() -> str:
        return getattr(g, "lang", app.config["DEFAULT_LANGUAGE"])

    babel.init_app(app, locale_selector=select_locale)

    if app.config["CORS_ENABLED"]:
        cors.init_app(
            app,
            resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
            supports_credentials=True,
        )

    login_manager.login_view = "login"

    register_page_routes(app)
    register_auth_routes(app)
    register_api_routes(app)

    with app.app_context():
        store.initialize()

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        """API отвечает 401, страницы перенаправляют на вход."""
        if request.path.startswith("/api/"):
            return api_error(_("Требуется авторизация"), 401)
        return redirect(url_for("login"))

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if request.path.startswith("/api/"):
            return api_error(error.description or error.name, error.code or 500)
        return error

    @app.before_request
    def resolve_request_language_middleware():
        g.lang = resolve_request_language(
            request=request,
            query_lang=request.args.get("lang"),
            supported_languages=app.config["SUPPORTED_LANGUAGES"],
            cookie_name=app.config["LANG_COOKIE_NAME"],
            default_language=app.config["DEFAULT_LANGUAGE"],
        )

    @app.context_processor
    def inject_template_globals():
        return {
            "current_lang": getattr(g, "lang", app.config["DEFAULT_LANGUAGE"]),
            "supported_langs": app.config["SUPPORTED_LANGUAGES"],
            "js_i18n": {
                "fill_all_fields": _("Пожалуйста, заполните все поля"),
                "connection_error": _("Ошибка соединения с сервером"),
                "load_error": _("Ошибка при загрузке данных"),
                "no_contacts": _("Контактов пока нет"),
                "edit": _("Изменить"),
                "delete": _("Удалить"),
                "confirm_delete": _("Вы уверены, что хотите удалить этот контакт?"),
                "confirm_logout": _("Вы уверены, что хотите выйти?"),
                "logout_error": _("Ошибка при выходе из системы"),
                "enter_password": _("Введите пароль"),
                "lang": getattr(g, "lang", app.config["DEFAULT_LANGUAGE"]),
            },
        }

    @app.after_request
    def persist_lang_cookie(response):
        supported_languages: tuple[str, ...] = app.config["SUPPORTED_LANGUAGES"]
        query_lang = request.args.get("lang")

        if query_lang and is_supported_language(query_lang, supported_languages):
            cookie_name = app.config["LANG_COOKIE_NAME"]
            normalized = query_lang.strip().lower()
            if request.cookies.get(cookie_name) != normalized:
                response.set_cookie(
                    cookie_name,
                    normalized,
                    max_age=app.config["LANG_COOKIE_MAX_AGE"],
                    secure=app.config["SESSION_COOKIE_SECURE"],
                    httponly=False,
                    samesite="Lax",
                    path="/",
                )

        return response

    @app.after_request
    def apply_security_headers(response):
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault("Permissions-Policy", "camera=(), microphone=(), geolocation=()")
        return response

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    return app


def install_shutdown_handlers(store: ContactStore) -> None:
    """По SIGINT/SIGTERM закрывает хранилище и завершает процесс."""

    def _shutdown(signum, frame):
        logger.info("Остановка сервера (сигнал %s)...", signum)
        store.close()
        sys.exit(0)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)


def main() -> None:
    setup_logging(Config.LOG_LEVEL, Config.LOG_FORMAT)
    app = create_app()
    install_shutdown_handlers(app.extensions["contact_store"])

    host = app.config["HOST"]
    port = app.config["PORT"]
    urls = build_startup_urls(host, port)
    logger.info("Сервер запущен на порту %s", port)
    logger.info("Локально: %s", urls["local"])
    logger.info("В сети: %s", urls["network"])
    logger.info("Админ-панель: %s", urls["admin"])
    logger.info("Режим: %s", "production" if app.config["PRODUCTION"] else "development")

    app.run(host=host, port=port, debug=not app.config["PRODUCTION"])


if __name__ == "__main__":
    main()

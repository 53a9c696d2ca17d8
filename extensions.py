"""
Модуль: `extensions.py`.
Назначение: Экземпляры Flask-расширений, общие для хранилища контактов,
авторизации администратора и локализации.
"""

from flask_babel import Babel
from flask_cors import CORS
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy

# Движок БД настраивает выбранное хранилище (storage.build_store) до db.init_app()
db = SQLAlchemy()
login_manager = LoginManager()
cors = CORS()
babel = Babel()

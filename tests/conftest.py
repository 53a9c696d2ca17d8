import pytest

from app import create_app
from config import Config

ADMIN_PASSWORD = "correct-horse-battery"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    ADMIN_PASSWORD = ADMIN_PASSWORD
    DATABASE_URL = None
    SQLITE_FILENAME = "contacts-test.sqlite"
    SCHEMA_INIT_STRICT = True
    CORS_ENABLED = False
    SESSION_COOKIE_SECURE = False
    DEFAULT_LANGUAGE = "ru"


def make_config(tmp_path, **overrides):
    attrs = {"SQLITE_DIR": str(tmp_path)}
    attrs.update(overrides)
    return type("PerTestConfig", (TestConfig,), attrs)


@pytest.fixture
def app(tmp_path):
    app = create_app(make_config(tmp_path))
    yield app
    app.extensions["contact_store"].close()


@pytest.fixture
def store(app):
    return app.extensions["contact_store"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def create_contact(client):
    def _create(name="Alice", phone="123", email="alice@example.com"):
        response = client.post("/api/contacts", json={"name": name, "phone": phone, "email": email})
        assert response.status_code == 200, response.get_json()
        return response.get_json()["data"]

    return _create

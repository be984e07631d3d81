import pytest

from app import app as flask_app
from database import get_connection
from init_db import bootstrap_schema


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "notes.db"
    conn = get_connection(path)
    bootstrap_schema(conn)
    conn.close()
    return path


@pytest.fixture
def conn(db_path):
    connection = get_connection(db_path)
    yield connection
    connection.close()


@pytest.fixture
def app(db_path):
    original = dict(flask_app.config)
    flask_app.config.update(TESTING=True, DATABASE=db_path)
    yield flask_app
    flask_app.config.clear()
    flask_app.config.update(original)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(app):
    """Factory returning a fresh test client that has logged in as ``username``."""

    def _login(username):
        browser = app.test_client()
        response = browser.get(f"/login/{username}")
        assert response.status_code == 302
        return browser

    return _login


def csrf_token_for(browser):
    return browser.get("/session").get_json()["csrf_token"]


@pytest.fixture
def csrf_token():
    return csrf_token_for

import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'jukebox' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import factories as test_factories
from tests.support.http import TEST_JWT_SECRET, bearer, login, register


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep host environment settings out of the tests."""
    for name in ("APP_ENV", "JWT_SECRET", "JWT_ALGORITHM", "JWT_EXPIRES_IN_SECONDS", "SEED_ON_STARTUP"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def app_config(tmp_path):
    db_path = Path(tmp_path) / "test.sqlite"
    return {
        "TESTING": True,
        "APP_ENV": "development",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path.as_posix()}",
        "JWT_SECRET": TEST_JWT_SECRET,
        "SEED_ON_STARTUP": False,
    }


@pytest.fixture
def app(app_config):
    import app as app_module
    from jukebox.database.db_manager import db

    application = app_module.create_app(app_config)
    yield application
    with application.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def db_session(app_context):
    from jukebox.database.db_manager import db

    test_factories.set_session(db.session)
    try:
        yield db.session
    finally:
        db.session.rollback()
        db.session.remove()
        test_factories.reset_session()


@pytest.fixture
def factories(db_session):
    yield test_factories


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    from jukebox.database.seed import seed_database

    with app.app_context():
        return seed_database()


@pytest.fixture
def token_service(app):
    return app.extensions["token_service"]


@pytest.fixture
def alice(client):
    """Register alice and return (user dict, auth headers)."""
    body = register(client, "alice", "secret1").get_json()
    return body["user"], bearer(body["token"])


@pytest.fixture
def bob(client):
    body = register(client, "bob", "hunter22").get_json()
    return body["user"], bearer(body["token"])


@pytest.fixture
def musiclover_headers(client, seeded):
    resp = login(client, "musiclover", "password123")
    assert resp.status_code == 200
    return bearer(resp.get_json()["token"])

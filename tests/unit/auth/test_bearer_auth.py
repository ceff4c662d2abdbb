from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tests.support.http import TEST_JWT_SECRET, bearer, register


@pytest.mark.unit
def test_missing_authorization_header_is_401(client):
    resp = client.get("/playlists")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Access token required"}


@pytest.mark.unit
def test_bearer_scheme_without_token_counts_as_missing(client):
    resp = client.get("/playlists", headers={"Authorization": "Bearer "})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Access token required"}


@pytest.mark.unit
def test_garbage_token_is_401_invalid(client):
    resp = client.get("/playlists", headers=bearer("not-a-jwt"))
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


@pytest.mark.unit
def test_other_auth_scheme_is_401_invalid(client, alice):
    _, headers = alice
    token = headers["Authorization"].split(" ", 1)[1]
    resp = client.get("/playlists", headers={"Authorization": f"Basic {token}"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


@pytest.mark.unit
def test_expired_token_is_401(client, alice):
    user, _ = alice
    expired = jwt.encode(
        {"userId": user["id"], "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        TEST_JWT_SECRET,
        algorithm="HS256",
    )
    resp = client.get("/playlists", headers=bearer(expired))
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


@pytest.mark.unit
def test_token_for_unknown_user_is_401(client, token_service):
    resp = client.get("/playlists", headers=bearer(token_service.issue(999999)))
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


@pytest.mark.unit
def test_scheme_is_case_insensitive(client, alice):
    _, headers = alice
    token = headers["Authorization"].split(" ", 1)[1]
    resp = client.get("/playlists", headers={"Authorization": f"bearer {token}"})
    assert resp.status_code == 200


@pytest.mark.unit
def test_valid_token_attaches_identity(client, alice):
    user, headers = alice
    created = client.post(
        "/playlists", headers=headers, json={"name": "Mine", "description": "Owned by alice"}
    ).get_json()
    assert created["user_id"] == user["id"]


@pytest.mark.unit
def test_no_session_cookie_is_issued(client, alice):
    _, headers = alice
    resp = client.get("/playlists", headers=headers)
    assert resp.status_code == 200
    assert "Set-Cookie" not in resp.headers


@pytest.mark.unit
@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/playlists"),
        ("post", "/playlists"),
        ("get", "/playlists/1"),
        ("get", "/playlists/1/tracks"),
        ("post", "/playlists/1/tracks"),
        ("get", "/tracks/1/playlists"),
    ],
)
def test_protected_routes_require_token(client, seeded, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401


@pytest.mark.unit
@pytest.mark.parametrize("path", ["/tracks", "/tracks/1", "/healthz"])
def test_public_routes_do_not_require_token(client, seeded, path):
    assert client.get(path).status_code == 200


@pytest.mark.unit
def test_each_app_verifies_with_its_own_secret(tmp_path):
    import app as app_module
    from jukebox.database.db_manager import db

    def _config(name, secret):
        return {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{(tmp_path / name).as_posix()}",
            "JWT_SECRET": secret,
            "SEED_ON_STARTUP": False,
        }

    first = app_module.create_app(_config("first.sqlite", "a" * 40))
    first_client = first.test_client()
    token = register(first_client, "carol", "pw-carol").get_json()["token"]

    second = app_module.create_app(_config("second.sqlite", "b" * 40))
    second_client = second.test_client()
    register(second_client, "dave", "pw-dave")
    try:
        assert first_client.get("/playlists", headers=bearer(token)).status_code == 200

        # dave shares carol's user id, so only the signature tells them apart
        foreign = second_client.get("/playlists", headers=bearer(token))
        assert foreign.status_code == 401
        assert foreign.get_json() == {"error": "Invalid token"}
    finally:
        for application in (first, second):
            with application.app_context():
                db.session.remove()
                db.engine.dispose()

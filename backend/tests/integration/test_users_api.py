"""Integration tests for signup, login, logout and refresh endpoints."""

from __future__ import annotations

from balance_api.models.refresh_token import RefreshToken
from tests.factories.user import DEFAULT_PASSWORD, UserFactory

SIGNUP = "/api/user/signup"
LOGIN = "/api/user/login"
LOGOUT = "/api/user/logout"
REFRESH = "/api/user/refresh"


def _login(client, email: str, password: str = DEFAULT_PASSWORD):
    return client.post(LOGIN, json={"email": email, "password": password})


class TestSignup:
    def test_signup_returns_201_with_empty_body(self, client):
        resp = client.post(
            SIGNUP,
            json={"email": "new@example.com", "password": "GoodPass1!", "username": "newbie"},
        )
        assert resp.status_code == 201
        assert resp.get_data(as_text=True) == ""

    def test_weak_password_is_a_problem_400(self, client):
        resp = client.post(
            SIGNUP,
            json={"email": "new@example.com", "password": "short1!", "username": "newbie"},
        )
        assert resp.status_code == 400
        assert resp.mimetype == "application/problem+json"
        body = resp.get_json()
        assert body["code"] == "validation_error"
        assert body["details"] == {"field": "password"}
        assert body["request_id"]

    def test_duplicate_email_is_409(self, client):
        UserFactory(email="taken@example.com")
        resp = client.post(
            SIGNUP,
            json={"email": "taken@example.com", "password": "GoodPass1!", "username": "again"},
        )
        assert resp.status_code == 409
        assert resp.get_json()["code"] == "duplicate_email"

    def test_schema_errors_are_422(self, client):
        resp = client.post(SIGNUP, json={"email": "not-an-email"})
        assert resp.status_code == 422
        errors = resp.get_json()["details"]["errors"]
        assert {"email", "password", "username"} <= set(errors)


class TestLogin:
    def test_login_returns_tokens(self, client, session):
        user = UserFactory(username="player")

        resp = _login(client, user.email)

        assert resp.status_code == 200
        assert resp.headers["Authorization"].startswith("Bearer ")
        refresh = resp.get_data(as_text=True)
        assert refresh
        stored = session.query(RefreshToken).filter_by(owner_email=user.email).one()
        assert stored.token == refresh

    def test_wrong_password_is_401(self, client):
        user = UserFactory()
        resp = _login(client, user.email, "WrongPass1!")
        assert resp.status_code == 401
        assert resp.get_json()["code"] == "invalid_credentials"

    def test_unknown_email_is_404(self, client, db):
        resp = _login(client, "ghost@example.com")
        assert resp.status_code == 404


class TestLogoutAndRefresh:
    def test_refresh_with_plain_text_body(self, client):
        user = UserFactory()
        refresh = _login(client, user.email).get_data(as_text=True)

        resp = client.post(REFRESH, data=refresh, content_type="text/plain")

        assert resp.status_code == 200
        assert resp.headers["Authorization"].startswith("Bearer ")

    def test_refresh_with_json_body(self, client):
        user = UserFactory()
        refresh = _login(client, user.email).get_data(as_text=True)

        resp = client.post(REFRESH, json={"refresh_token": refresh})

        assert resp.status_code == 200

    def test_logout_then_refresh_is_401(self, client):
        user = UserFactory()
        refresh = _login(client, user.email).get_data(as_text=True)

        assert client.post(LOGOUT, data=refresh, content_type="text/plain").status_code == 200
        # Second logout is a harmless no-op
        assert client.post(LOGOUT, data=refresh, content_type="text/plain").status_code == 200

        resp = client.post(REFRESH, data=refresh, content_type="text/plain")
        assert resp.status_code == 401
        assert resp.get_json()["code"] == "unauthenticated"

    def test_empty_body_is_422(self, client, db):
        resp = client.post(LOGOUT, data="", content_type="text/plain")
        assert resp.status_code == 422

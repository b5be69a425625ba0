"""Account and session endpoints: signup, login, logout, refresh."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from balance_api.api.deps import (
    read_refresh_token,
    session_service,
    text_response,
    timing,
    with_bearer,
)
from balance_api.core.extensions import limiter
from balance_api.schemas import LoginSchema, SignupSchema
from balance_api.services import LoginIn, SignupIn

bp = Blueprint("users", __name__)

signup_schema = SignupSchema()
login_schema = LoginSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/signup")
@timing
def signup():
    """Create an account; the response body is empty."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    session_service().signup(SignupIn(**data))
    return text_response("", status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials.

    The access token travels in the ``Authorization`` header and the refresh
    token is the plain-text body.
    """

    data = login_schema.load(request.get_json(silent=True) or {})
    out = session_service().login(LoginIn(**data))
    return with_bearer(text_response(out.refresh_token), out.access_token)


@bp.post("/logout")
@timing
def logout():
    """Revoke the refresh token sent in the body. Unknown tokens are accepted."""

    session_service().logout(read_refresh_token())
    return text_response("Logged out.")


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a stored refresh token for a new access token."""

    access = session_service().refresh(read_refresh_token())
    return with_bearer(text_response(""), access)

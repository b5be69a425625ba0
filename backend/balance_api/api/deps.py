"""Shared API helpers for identity resolution, request parsing and responses."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from marshmallow import ValidationError as MarshmallowValidationError

from balance_api.infra.jwt.flask_jwt_token_provider import ROLE_CLAIM, JWTTokenProvider
from balance_api.models.user import Role
from balance_api.schemas import RefreshTokenSchema
from balance_api.services import (
    AuthTokenConfig,
    CommentService,
    Identity,
    LikeService,
    SessionService,
)
from balance_api.services._shared.errors import UnauthenticatedError

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "

refresh_token_schema = RefreshTokenSchema()


# ------------------------------ Identity ------------------------------------


def current_identity() -> Identity:
    """Verify the access token of the current request and build the caller identity.

    Missing, malformed or expired tokens are rejected by flask-jwt-extended
    (rendered as 401 problems by ``core.errors``).

    :raises UnauthenticatedError: If the token carries an unknown role.
    """
    verify_jwt_in_request(optional=False)
    claims = get_jwt() or {}
    try:
        role = Role(claims.get(ROLE_CLAIM))
    except ValueError as exc:
        raise UnauthenticatedError("Token carries an unknown role") from exc
    return Identity(email=str(get_jwt_identity()), role=role)


def require_auth(func: F) -> F:
    """Resolve the caller once and pass it to the view as ``identity``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        kwargs["identity"] = current_identity()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# ------------------------------ Requests ------------------------------------


def read_refresh_token() -> str:
    """Return the refresh token sent as ``text/plain`` or as JSON ``{"refresh_token"}``.

    :raises marshmallow.ValidationError: When the body carries no token.
    """
    if request.is_json:
        data = refresh_token_schema.load(request.get_json(silent=True) or {})
        return str(data["refresh_token"]).strip()
    token = request.get_data(as_text=True).strip()
    if not token:
        raise MarshmallowValidationError({"refresh_token": ["Missing data for required field."]})
    return token


# ------------------------------ Services ------------------------------------


def session_service() -> SessionService:
    """Build a :class:`SessionService` wired with JWT lifetimes from app config."""
    cfg = current_app.config
    return SessionService(
        token_provider=JWTTokenProvider(),
        token_cfg=AuthTokenConfig(
            access_expires=cfg["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=cfg["JWT_REFRESH_TOKEN_EXPIRES"],
        ),
    )


def comment_service() -> CommentService:
    return CommentService()


def like_service() -> LikeService:
    return LikeService()


# ------------------------------ Responses -----------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def text_response(body: str, *, status: int = 200) -> Response:
    """Return a ``text/plain`` response."""

    return Response(body, status=status, mimetype="text/plain")


def with_bearer(response: Response, access_token: str) -> Response:
    """Attach ``Authorization: Bearer <token>`` to an outgoing response."""

    response.headers["Authorization"] = f"{BEARER_PREFIX}{access_token}"
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]

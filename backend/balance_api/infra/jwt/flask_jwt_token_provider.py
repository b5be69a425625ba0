# balance_api/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token as _create_access
from flask_jwt_extended import create_refresh_token as _create_refresh
from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from balance_api.models.user import Role
from balance_api.services._shared.errors import InvalidTokenError
from balance_api.services._shared.ports import TokenClaims, TokenProvider

ROLE_CLAIM = "role"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Tokens carry ``sub=<email>``, a ``role`` claim and the library's ``type``
    claim (``access`` / ``refresh``). Signing key, algorithm and default
    lifetimes come from the Flask config.

    .. note::
       Requires an active Flask app context.
    """

    def create_access_token(
        self, *, email: str, role: Role, expires_delta: timedelta | None = None
    ) -> str:
        return cast(
            str,
            _create_access(
                identity=email,
                additional_claims={ROLE_CLAIM: role.value},
                expires_delta=expires_delta,
            ),
        )

    def create_refresh_token(
        self, *, email: str, role: Role, expires_delta: timedelta | None = None
    ) -> str:
        return cast(
            str,
            _create_refresh(
                identity=email,
                additional_claims={ROLE_CLAIM: role.value},
                expires_delta=expires_delta,
            ),
        )

    def validate(self, token: str, *, expected_type: str | None = None) -> TokenClaims:
        try:
            claims = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc

        token_type = str(claims.get("type", ""))
        if expected_type is not None and token_type != expected_type:
            raise InvalidTokenError(f"Expected a {expected_type} token")
        try:
            role = Role(claims.get(ROLE_CLAIM))
        except ValueError as exc:
            raise InvalidTokenError("Token carries an unknown role") from exc

        return TokenClaims(
            email=str(claims["sub"]),
            role=role,
            token_type=token_type,
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=UTC),
        )

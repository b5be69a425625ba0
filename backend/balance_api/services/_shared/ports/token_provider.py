from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final, Protocol

from balance_api.models.user import Role

ACCESS: Final[str] = "access"
REFRESH: Final[str] = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified content of a token.

    :param email: Subject of the token.
    :param role: Role claim.
    :param token_type: ``"access"`` or ``"refresh"``.
    :param expires_at: Absolute expiry (UTC).
    """

    email: str
    role: Role
    token_type: str
    expires_at: datetime


class TokenProvider(Protocol):
    """Port for signing and validating JWTs that carry identity and role."""

    def create_access_token(
        self, *, email: str, role: Role, expires_delta: timedelta | None = None
    ) -> str: ...

    def create_refresh_token(
        self, *, email: str, role: Role, expires_delta: timedelta | None = None
    ) -> str: ...

    def validate(self, token: str, *, expected_type: str | None = None) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.

        :raises InvalidTokenError: When the token is tampered, malformed,
            expired, of the wrong type, or carries an unknown role.
        """
        ...

"""In-memory token provider for service tests that do not need real JWTs."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import timedelta

from balance_api.models.base import utcnow
from balance_api.models.user import Role
from balance_api.services._shared.errors import InvalidTokenError
from balance_api.services._shared.ports import ACCESS, REFRESH, TokenClaims, TokenProvider


@dataclass
class StubTokenProvider(TokenProvider):
    """Issue readable ``<type>:<email>:<role>:<n>`` tokens and validate them back.

    Tokens listed in ``revoked`` fail validation, which lets tests simulate a
    tampered or expired JWT without touching the clock.
    """

    revoked: set[str] = field(default_factory=set)
    _counter: itertools.count = field(default_factory=lambda: itertools.count(1))

    def _issue(self, token_type: str, email: str, role: Role) -> str:
        return f"{token_type}:{email}:{role.value}:{next(self._counter)}"

    def create_access_token(self, *, email, role, expires_delta=None) -> str:
        return self._issue(ACCESS, email, role)

    def create_refresh_token(self, *, email, role, expires_delta=None) -> str:
        return self._issue(REFRESH, email, role)

    def validate(self, token, *, expected_type=None) -> TokenClaims:
        parts = token.split(":")
        if token in self.revoked or len(parts) != 4:
            raise InvalidTokenError()
        token_type, email, role, _ = parts
        if expected_type is not None and token_type != expected_type:
            raise InvalidTokenError(f"Expected a {expected_type} token")
        return TokenClaims(
            email=email,
            role=Role(role),
            token_type=token_type,
            expires_at=utcnow() + timedelta(minutes=5),
        )

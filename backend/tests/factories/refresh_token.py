"""Factory Boy definition for persisted refresh tokens."""

from __future__ import annotations

from datetime import timedelta

import factory

from balance_api.models.base import utcnow
from balance_api.models.refresh_token import RefreshToken
from tests.factories import BaseFactory


class RefreshTokenFactory(BaseFactory):
    class Meta:
        model = RefreshToken

    id = None
    owner_email = factory.Sequence(lambda n: f"owner{n}@example.com")
    token = factory.Sequence(lambda n: f"refresh-token-{n}")
    expires_at = factory.LazyFunction(lambda: utcnow() + timedelta(days=14))

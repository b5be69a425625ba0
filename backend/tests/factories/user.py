"""Factory Boy definition for :class:`balance_api.models.user.User`."""

from __future__ import annotations

import factory

from balance_api.models.user import Role, User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "GoodPass1!"


class UserFactory(BaseFactory):
    """Build persisted :class:`User` instances with a hashed password."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    role = Role.USER
    password = DEFAULT_PASSWORD

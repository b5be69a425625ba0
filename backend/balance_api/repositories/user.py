"""User repository: lookups by normalized email."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from balance_api.models.user import User
from balance_api.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens or checks password policy; that is the session
    service's job.
    """

    model = User

    def _filterable_fields(self):
        return {"email": User.email, "username": User.username, "role": User.role}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :returns: User instance or ``None`` when not found.
        """
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == normalize_email(email))
        return self.session.execute(stmt).first() is not None

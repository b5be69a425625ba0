"""Refresh-token persistence keyed by owner email."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, select

from balance_api.models.refresh_token import RefreshToken
from balance_api.repositories.base import BaseRepository
from balance_api.repositories.user import normalize_email


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Stores at most one refresh token per account email."""

    model = RefreshToken

    def _filterable_fields(self):
        return {"owner_email": RefreshToken.owner_email, "token": RefreshToken.token}

    def get_by_email(self, email: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.owner_email == normalize_email(email))
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def get_by_token(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def upsert(self, *, owner_email: str, token: str, expires_at: datetime) -> RefreshToken:
        """Overwrite the row for ``owner_email`` or create it, then flush.

        :param owner_email: Account email (normalized here).
        :param token: Encoded refresh JWT.
        :param expires_at: Absolute UTC expiry.
        :returns: The persisted row.
        """
        row = self.get_by_email(owner_email)
        if row is None:
            row = RefreshToken(
                owner_email=normalize_email(owner_email),
                token=token,
                expires_at=expires_at,
            )
            return self.add(row)
        row.token = token
        row.expires_at = expires_at
        self.flush()
        return row

    def delete_by_token(self, token: str) -> bool:
        """Remove the row holding ``token``.

        :returns: ``True`` when a row was deleted, ``False`` when absent.
        """
        stmt = delete(RefreshToken).where(RefreshToken.token == token)
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return bool(result.rowcount)

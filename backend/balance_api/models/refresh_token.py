"""Persisted refresh tokens (one active row per account email)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from balance_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, as_utc, utcnow


class RefreshToken(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Server-side record of the refresh token issued at the last login.

    Fields
    ------
    owner_email : str
        Email of the account; a new login overwrites the previous row.
    token : str
        Encoded refresh JWT exactly as returned to the client.
    expires_at : datetime
        Absolute expiry (UTC); an expired row is never trusted.
    """

    __tablename__ = "refresh_tokens"

    owner_email: Mapped[str] = mapped_column(String(254), nullable=False)
    token: Mapped[str] = mapped_column(String(2048), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("owner_email", name="uq_refresh_tokens_owner_email"),
        UniqueConstraint("token", name="uq_refresh_tokens_token"),
    )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return ``True`` once ``expires_at`` is reached."""
        return as_utc(self.expires_at) <= as_utc(now or utcnow())

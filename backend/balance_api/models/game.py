"""Balance games and their choices (read-only from the API's point of view)."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from balance_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Game(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """A question offering two (or more) choices to pick between."""

    __tablename__ = "games"

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    choices: Mapped[list[Choice]] = relationship(
        "Choice",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="Choice.id",
    )

    @validates("title")
    def _normalize_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Game title is required.")
        return value.strip()


class Choice(PKMixin, ReprMixin, db.Model):
    """One option of a game. Always owned by exactly one game."""

    __tablename__ = "choices"

    game_id: Mapped[int] = mapped_column(
        ForeignKey("games.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(String(200), nullable=False)

    __table_args__ = (Index("ix_choices_game_id", "game_id"),)

    game: Mapped[Game] = relationship("Game", back_populates="choices")

"""Comments posted on a game."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from balance_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .like import CommentLike
    from .user import User

MAX_CONTENT_LENGTH = 500


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Free-text comment written by a user on a game.

    Only the author may edit or delete it. Deleting a comment removes its
    likes through the ORM cascade.
    """

    __tablename__ = "comments"

    game_id: Mapped[int] = mapped_column(
        ForeignKey("games.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(String(MAX_CONTENT_LENGTH), nullable=False)

    __table_args__ = (
        Index("ix_comments_game_id", "game_id"),
        Index("ix_comments_author_id", "author_id"),
    )

    author: Mapped[User] = relationship("User", back_populates="comments", lazy="selectin")
    likes: Mapped[list[CommentLike]] = relationship(
        "CommentLike",
        back_populates="comment",
        cascade="all, delete-orphan",
    )

    @validates("content")
    def _normalize_content(self, key: str, value: str) -> str:
        """
        Trim and bound the comment body.

        :raises ValueError: If the content is blank or too long.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Comment content is required.")
        v = value.strip()
        if len(v) > MAX_CONTENT_LENGTH:
            raise ValueError(f"Comment content exceeds {MAX_CONTENT_LENGTH} characters.")
        return v

"""Like rows for choices and comments.

Existence of a row encodes "liked". The unique ``(user, target)`` constraint
is what keeps concurrent toggles from producing duplicates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from balance_api.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .game import Choice


class ChoiceLike(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """A user's like on a game choice."""

    __tablename__ = "choice_likes"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    choice_id: Mapped[int] = mapped_column(
        ForeignKey("choices.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "choice_id", name="uq_choice_likes_user_choice"),
    )

    choice: Mapped[Choice] = relationship("Choice")


class CommentLike(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """A user's like on a comment."""

    __tablename__ = "comment_likes"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    comment_id: Mapped[int] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "comment_id", name="uq_comment_likes_user_comment"),
    )

    comment: Mapped[Comment] = relationship("Comment", back_populates="likes")

"""Comment repository."""

from __future__ import annotations

from sqlalchemy.orm import selectinload

from balance_api.models.comment import Comment
from balance_api.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Persistence-only repository for :class:`Comment`.

    Listing eager-loads likes so callers can report like counts without N+1.
    """

    model = Comment

    def _default_eagerload(self, stmt):
        return stmt.options(selectinload(Comment.likes))

    def _filterable_fields(self):
        return {"game_id": Comment.game_id, "author_id": Comment.author_id}

    def _updatable_fields(self):
        return {"content"}

    def list_for_game(self, game_id: int) -> list[Comment]:
        """Return every comment of ``game_id`` in insertion order (id ascending)."""
        return self.list(filters={"game_id": game_id})

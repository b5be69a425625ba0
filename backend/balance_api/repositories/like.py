"""Like repositories for choices and comments.

Both share the same shape: one row per ``(user, target)``. Removal is a
single ``DELETE ... WHERE`` so the "unlike" half of a toggle never depends on
a prior read.
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import delete
from sqlalchemy.orm import InstrumentedAttribute

from balance_api.models.like import ChoiceLike, CommentLike
from balance_api.repositories.base import BaseRepository

L = TypeVar("L", ChoiceLike, CommentLike)


class LikeRepository(BaseRepository[L]):
    """Shared toggle primitives; subclasses name the model and its target field."""

    #: Foreign-key attribute on ``model`` pointing at the liked entity
    target_field: str

    @property
    def _target(self) -> InstrumentedAttribute[Any]:
        # Resolved through the model; a mapped attribute stored on the
        # repository class would bind to the repository instance instead
        return getattr(self.model, self.target_field)

    def _filterable_fields(self):
        return {"user_id": self.model.user_id, self.target_field: self._target}

    def build(self, user_id: int, target_id: int) -> L:
        """Return an unsaved like row for ``(user_id, target_id)``."""
        return self.model(user_id=user_id, **{self.target_field: target_id})

    def remove(self, user_id: int, target_id: int) -> bool:
        """Delete the ``(user_id, target_id)`` row if present.

        :returns: ``True`` when a row was deleted.
        """
        stmt = delete(self.model).where(
            self.model.user_id == user_id,
            self._target == target_id,
        )
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return bool(result.rowcount)


class ChoiceLikeRepository(LikeRepository[ChoiceLike]):
    model = ChoiceLike
    target_field = "choice_id"


class CommentLikeRepository(LikeRepository[CommentLike]):
    model = CommentLike
    target_field = "comment_id"

"""
CommentService
==============

Comments scoped to a game:

- ``add_comment``: any user holding the ``COMMENT`` capability.
- ``get_comments``: insertion order (id ascending).
- ``update_comment`` / ``delete_comment``: author only.

Notes
-----
- A comment addressed through another game's path is reported as not found.
- Deleting a comment removes its likes through the ORM cascade.
- Unexpected failures during delete surface as ``OperationFailedError`` with
  the original exception chained and logged.
"""

from __future__ import annotations

import logging

from balance_api.models.comment import Comment
from balance_api.models.game import Game
from balance_api.services._shared.base import BaseService
from balance_api.services._shared.dto import Identity
from balance_api.services._shared.errors import (
    NotFoundError,
    OperationFailedError,
    ServiceError,
    ValidationError,
)
from balance_api.services._shared.policies.roles import Capability
from balance_api.services.comments.dto import CommentOut, comment_to_out
from balance_api.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

log = logging.getLogger(__name__)


class CommentService(BaseService):
    """Application service for comments on games."""

    # --------------------------------------------------------------------- #
    # Lookups
    # --------------------------------------------------------------------- #

    @staticmethod
    def _require_game(uow: SQLAlchemyRepositoryContainer, game_id: int) -> Game:
        game = uow.games.get(game_id)
        if game is None:
            raise NotFoundError("Game", game_id)
        return game

    def _require_comment(
        self, uow: SQLAlchemyRepositoryContainer, game_id: int, comment_id: int
    ) -> Comment:
        game = self._require_game(uow, game_id)
        comment = uow.comments.get(comment_id)
        if comment is None or comment.game_id != game.id:
            raise NotFoundError("Comment", comment_id)
        return comment

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def add_comment(self, game_id: int, content: str, identity: Identity) -> CommentOut:
        """
        Post a comment on a game.

        :param game_id: Target game.
        :param content: Comment body (trimmed, 1-500 characters).
        :param identity: Authenticated caller.
        :returns: The created comment.
        :raises NotFoundError: If the game does not exist.
        :raises ValidationError: If the content is blank or too long.
        """
        with self.rw_uow() as uow:
            actor = self.resolve_actor(uow, identity, capability=Capability.COMMENT)
            game = self._require_game(uow, game_id)
            try:
                comment = uow.comments.add(Comment(content=content, game_id=game.id, author=actor))
            except ValueError as exc:
                raise ValidationError(str(exc), field="content") from exc
            out = comment_to_out(comment)

        log.info("comment.added", extra={"game_id": game_id, "target_id": out.id})
        return out

    def update_comment(
        self, game_id: int, comment_id: int, content: str, identity: Identity
    ) -> CommentOut:
        """
        Replace the body of a comment.

        :raises NotFoundError: If the game or comment is missing, or the
            comment belongs to another game.
        :raises ForbiddenError: If the caller is not the author.
        :raises ValidationError: If the content is blank or too long.
        """
        with self.rw_uow() as uow:
            actor = self.resolve_actor(uow, identity, capability=Capability.COMMENT)
            comment = self._require_comment(uow, game_id, comment_id)
            self.ensure_owner(actor.id, comment.author_id, msg="Only the author can edit this comment.")
            try:
                uow.comments.update(comment, content=content)
            except ValueError as exc:
                raise ValidationError(str(exc), field="content") from exc
            out = comment_to_out(comment)

        return out

    def delete_comment(self, game_id: int, comment_id: int, identity: Identity) -> None:
        """
        Delete a comment together with its likes.

        :raises NotFoundError: If the game or comment is missing, or the
            comment belongs to another game.
        :raises ForbiddenError: If the caller is not the author.
        :raises OperationFailedError: On any non-domain failure.
        """
        try:
            with self.rw_uow() as uow:
                actor = self.resolve_actor(uow, identity, capability=Capability.COMMENT)
                comment = self._require_comment(uow, game_id, comment_id)
                self.ensure_owner(
                    actor.id, comment.author_id, msg="Only the author can delete this comment."
                )
                uow.comments.delete(comment)
        except ServiceError:
            raise
        except Exception as exc:
            log.error(
                "comment.delete.failed",
                extra={"game_id": game_id, "target_id": comment_id},
                exc_info=True,
            )
            raise OperationFailedError("Failed to delete comment") from exc

        log.info("comment.deleted", extra={"game_id": game_id, "target_id": comment_id})

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get_comments(self, game_id: int, identity: Identity) -> list[CommentOut]:
        """
        List the comments of a game, oldest first.

        :raises NotFoundError: If the game does not exist.
        """
        with self.ro_uow() as uow:
            self.resolve_actor(uow, identity)
            self._require_game(uow, game_id)
            return [comment_to_out(c) for c in uow.comments.list_for_game(game_id)]

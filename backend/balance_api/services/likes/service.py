"""
LikeService
===========

Toggle likes on choices and comments. Both operations run the same routine,
parameterized by :class:`LikeTarget`:

1. resolve the acting user (``UnauthenticatedError``);
2. resolve the game (``NotFoundError``);
3. resolve the target (``NotFoundError``);
4. check ``target.game_id == game.id`` (``TargetMismatchError``);
5. delete the ``(user, target)`` row if present, otherwise insert it.

The unique ``(user, target)`` constraint turns a concurrent duplicate insert
into an ``IntegrityError``; that case means another request already liked
the target, so the toggle reports ``LIKED`` instead of failing.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from balance_api.repositories.base import BaseRepository
from balance_api.repositories.like import LikeRepository
from balance_api.services._shared.base import BaseService
from balance_api.services._shared.dto import Identity
from balance_api.services._shared.errors import NotFoundError, TargetMismatchError
from balance_api.services._shared.policies.roles import Capability
from balance_api.services.likes.dto import LikeOutcome, LikeTarget, ToggleLikeOut
from balance_api.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class LikeService(BaseService):
    """Application service flipping like rows for choices and comments."""

    def toggle_choice_like(self, game_id: int, choice_id: int, identity: Identity) -> ToggleLikeOut:
        """
        Like or unlike a choice of a game.

        :param game_id: Game taken from the request path.
        :param choice_id: Choice to toggle.
        :param identity: Authenticated caller.
        :returns: Toggle result with the new state.
        """
        return self._toggle(LikeTarget.CHOICE, game_id, choice_id, identity)

    def toggle_comment_like(
        self, game_id: int, comment_id: int, identity: Identity
    ) -> ToggleLikeOut:
        """
        Like or unlike a comment of a game.

        :param game_id: Game taken from the request path.
        :param comment_id: Comment to toggle.
        :param identity: Authenticated caller.
        :returns: Toggle result with the new state.
        """
        return self._toggle(LikeTarget.COMMENT, game_id, comment_id, identity)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    @staticmethod
    def _repos(uow: SQLAlchemyUnitOfWork, target: LikeTarget) -> tuple[BaseRepository, LikeRepository]:
        if target is LikeTarget.CHOICE:
            return uow.choices, uow.choice_likes
        return uow.comments, uow.comment_likes

    def _toggle(
        self, target: LikeTarget, game_id: int, target_id: int, identity: Identity
    ) -> ToggleLikeOut:
        with self.rw_uow() as uow:
            actor = self.resolve_actor(uow, identity, capability=Capability.LIKE)
            actor_id = actor.id

            game = uow.games.get(game_id)
            if game is None:
                raise NotFoundError("Game", game_id)

            targets, likes = self._repos(uow, target)
            entity = targets.get(target_id)
            if entity is None:
                raise NotFoundError(target.value, target_id)
            if entity.game_id != game.id:
                raise TargetMismatchError(target.value, target_id, game_id)

            if likes.remove(actor_id, target_id):
                outcome = LikeOutcome.UNLIKED
            else:
                try:
                    likes.add(likes.build(actor_id, target_id))
                except IntegrityError:
                    # A concurrent toggle inserted the same row first
                    uow.rollback()
                    log.warning(
                        "like.toggle.conflict",
                        extra={"game_id": game_id, "target_id": target_id},
                    )
                outcome = LikeOutcome.LIKED

        result = ToggleLikeOut(target=target, target_id=target_id, outcome=outcome)
        log.info(
            "like.toggle",
            extra={"game_id": game_id, "target_id": target_id, "outcome": outcome.value},
        )
        return result

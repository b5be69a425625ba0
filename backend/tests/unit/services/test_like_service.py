"""Unit tests for LikeService toggles on choices and comments."""

from __future__ import annotations

import pytest
from sqlalchemy import func, insert, select

from balance_api.models.like import ChoiceLike, CommentLike
from balance_api.repositories.like import ChoiceLikeRepository
from balance_api.services._shared.dto import Identity
from balance_api.services._shared.errors import (
    NotFoundError,
    TargetMismatchError,
    UnauthenticatedError,
)
from balance_api.services.likes.dto import LikeOutcome, LikeTarget
from balance_api.services.likes.service import LikeService
from tests.factories.comment import CommentFactory
from tests.factories.game import ChoiceFactory, GameFactory


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


class TestToggleChoiceLike:
    @pytest.fixture()
    def service(self) -> LikeService:
        return LikeService()

    def test_toggle_twice_returns_to_original_state(self, service, session, identity):
        choice = ChoiceFactory()
        game_id, choice_id = choice.game_id, choice.id

        first = service.toggle_choice_like(game_id, choice_id, identity)
        assert first.outcome is LikeOutcome.LIKED
        assert first.message == "Like added to the choice."
        assert _count(session, ChoiceLike) == 1

        second = service.toggle_choice_like(game_id, choice_id, identity)
        assert second.outcome is LikeOutcome.UNLIKED
        assert second.message == "Like removed from the choice."
        assert _count(session, ChoiceLike) == 0

    def test_choice_of_another_game_is_rejected(self, service, session, identity):
        game = GameFactory()
        foreign = ChoiceFactory()

        with pytest.raises(TargetMismatchError):
            service.toggle_choice_like(game.id, foreign.id, identity)
        assert _count(session, ChoiceLike) == 0

    def test_unknown_game(self, service, identity):
        choice = ChoiceFactory()

        with pytest.raises(NotFoundError, match="Game"):
            service.toggle_choice_like(9999, choice.id, identity)

    def test_unknown_choice(self, service, identity):
        game = GameFactory()

        with pytest.raises(NotFoundError, match="Choice"):
            service.toggle_choice_like(game.id, 9999, identity)

    def test_identity_without_account(self, service, user):
        choice = ChoiceFactory()
        ghost = Identity(email="ghost@example.com", role=user.role)

        with pytest.raises(UnauthenticatedError):
            service.toggle_choice_like(choice.game_id, choice.id, ghost)

    def test_missing_identity(self, service):
        choice = ChoiceFactory()

        with pytest.raises(UnauthenticatedError):
            service.toggle_choice_like(choice.game_id, choice.id, None)

    def test_like_committed_between_delete_and_insert_leaves_one_row(
        self, service, session, user, identity, monkeypatch
    ):
        """Losing the insert race to another request reports LIKED and keeps a single row."""
        choice = ChoiceFactory()
        game_id, choice_id = choice.game_id, choice.id
        real_remove = ChoiceLikeRepository.remove
        calls = []

        def remove_then_competing_commit(repo, user_id, target_id):
            removed = real_remove(repo, user_id, target_id)
            calls.append(removed)
            # Another request commits the same like before this one inserts
            repo.session.execute(insert(ChoiceLike).values(user_id=user_id, choice_id=target_id))
            repo.session.commit()
            return removed

        monkeypatch.setattr(ChoiceLikeRepository, "remove", remove_then_competing_commit)

        out = service.toggle_choice_like(game_id, choice_id, identity)

        assert calls == [False]
        assert out.outcome is LikeOutcome.LIKED
        assert _count(session, ChoiceLike) == 1

        monkeypatch.undo()
        again = service.toggle_choice_like(game_id, choice_id, identity)

        assert again.outcome is LikeOutcome.UNLIKED
        assert _count(session, ChoiceLike) == 0


class TestToggleCommentLike:
    @pytest.fixture()
    def service(self) -> LikeService:
        return LikeService()

    def test_like_then_unlike(self, service, session, identity):
        comment = CommentFactory()
        game_id, comment_id = comment.game_id, comment.id

        liked = service.toggle_comment_like(game_id, comment_id, identity)
        unliked = service.toggle_comment_like(game_id, comment_id, identity)

        assert liked.target is LikeTarget.COMMENT
        assert liked.outcome is LikeOutcome.LIKED
        assert liked.message == "Like added to the comment."
        assert unliked.message == "Like removed from the comment."
        assert _count(session, CommentLike) == 0

    def test_comment_of_another_game_is_rejected(self, service, session, identity):
        game = GameFactory()
        comment = CommentFactory()

        with pytest.raises(TargetMismatchError):
            service.toggle_comment_like(game.id, comment.id, identity)
        assert _count(session, CommentLike) == 0

    def test_unknown_comment(self, service, identity):
        game = GameFactory()

        with pytest.raises(NotFoundError, match="Comment"):
            service.toggle_comment_like(game.id, 9999, identity)

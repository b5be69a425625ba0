"""Unit tests for CommentService."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from balance_api.models.comment import Comment
from balance_api.models.like import CommentLike
from balance_api.repositories.comment import CommentRepository
from balance_api.services._shared.dto import Identity
from balance_api.services._shared.errors import (
    ForbiddenError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)
from balance_api.services.comments.service import CommentService
from tests.factories.comment import CommentFactory
from tests.factories.game import GameFactory
from tests.factories.like import CommentLikeFactory
from tests.factories.user import UserFactory


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


class TestCommentService:
    """Validate comment CRUD and author-only rules."""

    @pytest.fixture()
    def service(self) -> CommentService:
        return CommentService()

    @pytest.fixture()
    def game(self, session):
        return GameFactory()

    @pytest.fixture()
    def stranger(self, session) -> Identity:
        other = UserFactory()
        return Identity(email=other.email, role=other.role)

    # --------------------------------------------------------------------- #
    # Create / list
    # --------------------------------------------------------------------- #

    def test_add_comment(self, service, game, user, identity):
        out = service.add_comment(game.id, "  First!  ", identity)

        assert out.content == "First!"
        assert out.game_id == game.id
        assert out.author_id == user.id
        assert out.author_username == user.username
        assert out.like_count == 0
        assert out.created_at is not None

    def test_add_comment_unknown_game(self, service, identity):
        with pytest.raises(NotFoundError, match="Game"):
            service.add_comment(9999, "hello", identity)

    def test_add_comment_rejects_blank_content(self, service, game, identity, session):
        with pytest.raises(ValidationError):
            service.add_comment(game.id, "   ", identity)
        assert _count(session, Comment) == 0

    def test_get_comments_in_insertion_order_with_like_counts(self, service, game, identity):
        first = service.add_comment(game.id, "one", identity)
        second = service.add_comment(game.id, "two", identity)
        CommentFactory()  # another game
        CommentLikeFactory(comment_id=second.id)

        items = service.get_comments(game.id, identity)

        assert [c.id for c in items] == [first.id, second.id]
        assert [c.like_count for c in items] == [0, 1]

    def test_get_comments_unknown_game(self, service, identity):
        with pytest.raises(NotFoundError):
            service.get_comments(9999, identity)

    # --------------------------------------------------------------------- #
    # Update
    # --------------------------------------------------------------------- #

    def test_author_can_update(self, service, game, identity, session):
        created = service.add_comment(game.id, "before", identity)

        out = service.update_comment(game.id, created.id, "after", identity)

        assert out.content == "after"
        assert CommentRepository(session=session).get(created.id).content == "after"

    def test_other_user_cannot_update(self, service, game, identity, stranger):
        created = service.add_comment(game.id, "mine", identity)

        with pytest.raises(ForbiddenError):
            service.update_comment(game.id, created.id, "hijacked", stranger)

    def test_update_through_another_game_is_not_found(self, service, game, identity):
        created = service.add_comment(game.id, "mine", identity)
        other = GameFactory()

        with pytest.raises(NotFoundError, match="Comment"):
            service.update_comment(other.id, created.id, "moved", identity)

    # --------------------------------------------------------------------- #
    # Delete
    # --------------------------------------------------------------------- #

    def test_author_can_delete_with_likes(self, service, game, identity, session):
        created = service.add_comment(game.id, "bye", identity)
        CommentLikeFactory(comment_id=created.id)

        service.delete_comment(game.id, created.id, identity)

        assert _count(session, Comment) == 0
        assert _count(session, CommentLike) == 0

    def test_other_user_cannot_delete(self, service, game, identity, stranger, session):
        created = service.add_comment(game.id, "stay", identity)

        with pytest.raises(ForbiddenError):
            service.delete_comment(game.id, created.id, stranger)
        assert _count(session, Comment) == 1

    def test_delete_unknown_comment(self, service, game, identity):
        with pytest.raises(NotFoundError):
            service.delete_comment(game.id, 9999, identity)

    def test_delete_wraps_unexpected_failures(self, service, game, identity, monkeypatch):
        created = service.add_comment(game.id, "boom", identity)

        def _explode(self, instance):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(CommentRepository, "delete", _explode)

        with pytest.raises(OperationFailedError, match="Failed to delete comment") as exc:
            service.delete_comment(game.id, created.id, identity)
        assert isinstance(exc.value.__cause__, RuntimeError)

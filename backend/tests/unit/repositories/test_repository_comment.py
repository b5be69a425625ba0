"""Unit tests for CommentRepository and the generic BaseRepository helpers."""

import pytest

from balance_api.repositories.comment import CommentRepository
from tests.factories.comment import CommentFactory
from tests.factories.game import GameFactory
from tests.factories.like import CommentLikeFactory


class TestCommentRepository:
    @pytest.fixture()
    def repo(self, session):
        return CommentRepository(session=session)

    def test_list_for_game_returns_insertion_order(self, repo):
        game = GameFactory()
        other = GameFactory()
        first = CommentFactory(game_id=game.id)
        CommentFactory(game_id=other.id)
        second = CommentFactory(game_id=game.id)

        rows = repo.list_for_game(game.id)

        assert [c.id for c in rows] == [first.id, second.id]

    def test_list_eager_loads_likes(self, repo):
        comment = CommentFactory()
        CommentLikeFactory(comment_id=comment.id)

        (row,) = repo.list_for_game(comment.game_id)

        assert len(row.likes) == 1

    def test_update_content_only(self, repo, session):
        comment = CommentFactory(content="before")

        repo.update(comment, content="  after ")
        session.commit()

        assert repo.get(comment.id).content == "after"
        with pytest.raises(ValueError):
            repo.update(comment, author_id=123)

    def test_list_ignores_non_whitelisted_filters(self, repo):
        game = GameFactory()
        a = CommentFactory(game_id=game.id)
        b = CommentFactory(game_id=game.id)

        rows = repo.list(filters={"game_id": game.id, "content": "nope"})

        assert [c.id for c in rows] == [a.id, b.id]

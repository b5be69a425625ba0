"""Integration tests for comment endpoints."""

from __future__ import annotations

from tests.factories.comment import CommentFactory
from tests.factories.game import GameFactory
from tests.factories.user import UserFactory
from tests.helpers.auth import (
    access_token_for,
    access_token_for_email,
    bearer,
    expired_access_token,
)


def _url(game_id: int, comment_id: int | None = None) -> str:
    base = f"/api/game/{game_id}/comment"
    return base if comment_id is None else f"{base}/{comment_id}"


class TestCommentsApi:
    def test_create_and_list(self, client, auth_header, user):
        game = GameFactory()

        created = client.post(_url(game.id), json={"content": "  Nice one  "}, headers=auth_header)
        assert created.status_code == 201
        body = created.get_json()
        assert body["content"] == "Nice one"
        assert body["author_username"] == user.username
        assert body["like_count"] == 0

        listed = client.get(_url(game.id), headers=auth_header)
        assert listed.status_code == 200
        assert [c["id"] for c in listed.get_json()] == [body["id"]]

    def test_requires_authentication(self, client, db):
        game = GameFactory()
        resp = client.get(_url(game.id))
        assert resp.status_code == 401
        assert resp.mimetype == "application/problem+json"

    def test_expired_token_is_401(self, client, user):
        game = GameFactory()
        resp = client.get(_url(game.id), headers=bearer(expired_access_token(user)))
        assert resp.status_code == 401

    def test_token_for_deleted_account_is_401(self, client, db):
        game = GameFactory()
        resp = client.get(_url(game.id), headers=bearer(access_token_for_email("gone@example.com")))
        assert resp.status_code == 401

    def test_content_length_is_validated(self, client, auth_header):
        game = GameFactory()
        assert client.post(_url(game.id), json={"content": "   "}, headers=auth_header).status_code == 422
        too_long = {"content": "x" * 501}
        assert client.post(_url(game.id), json=too_long, headers=auth_header).status_code == 422

    def test_unknown_game_is_404(self, client, auth_header):
        resp = client.post(_url(9999), json={"content": "hi"}, headers=auth_header)
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "not_found"

    def test_update_by_author(self, client, auth_header, user):
        comment = CommentFactory(author=user)

        resp = client.put(
            _url(comment.game_id, comment.id), json={"content": "edited"}, headers=auth_header
        )

        assert resp.status_code == 200
        assert resp.get_json()["content"] == "edited"

    def test_update_by_someone_else_is_403(self, client, auth_header):
        comment = CommentFactory(author=UserFactory())

        resp = client.put(
            _url(comment.game_id, comment.id), json={"content": "mine now"}, headers=auth_header
        )

        assert resp.status_code == 403

    def test_delete_by_author(self, client, user):
        comment = CommentFactory(author=user)
        game_id, comment_id = comment.game_id, comment.id
        headers = bearer(access_token_for(user))

        resp = client.delete(_url(game_id, comment_id), headers=headers)

        assert resp.status_code == 200
        assert resp.get_data(as_text=True) == "Comment deleted."
        assert client.get(_url(game_id), headers=headers).get_json() == []

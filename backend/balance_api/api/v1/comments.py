"""Comment endpoints scoped to a game."""

from __future__ import annotations

from flask import Blueprint, request

from balance_api.api.deps import (
    comment_service,
    json_response,
    require_auth,
    text_response,
    timing,
)
from balance_api.schemas import CommentInSchema, CommentSchema
from balance_api.services import Identity

bp = Blueprint("comments", __name__)

comment_in_schema = CommentInSchema()
comment_schema = CommentSchema()


@bp.post("/<int:game_id>/comment")
@require_auth
@timing
def create_comment(game_id: int, identity: Identity):
    """Post a comment on a game."""

    data = comment_in_schema.load(request.get_json(silent=True) or {})
    out = comment_service().add_comment(game_id, data["content"], identity)
    return json_response(comment_schema.dump(out), status=201)


@bp.get("/<int:game_id>/comment")
@require_auth
@timing
def list_comments(game_id: int, identity: Identity):
    """List the comments of a game, oldest first."""

    items = comment_service().get_comments(game_id, identity)
    return json_response(comment_schema.dump(items, many=True))


@bp.put("/<int:game_id>/comment/<int:comment_id>")
@require_auth
@timing
def update_comment(game_id: int, comment_id: int, identity: Identity):
    """Replace the content of the caller's own comment."""

    data = comment_in_schema.load(request.get_json(silent=True) or {})
    out = comment_service().update_comment(game_id, comment_id, data["content"], identity)
    return json_response(comment_schema.dump(out))


@bp.delete("/<int:game_id>/comment/<int:comment_id>")
@require_auth
@timing
def delete_comment(game_id: int, comment_id: int, identity: Identity):
    """Delete the caller's own comment and its likes."""

    comment_service().delete_comment(game_id, comment_id, identity)
    return text_response("Comment deleted.")

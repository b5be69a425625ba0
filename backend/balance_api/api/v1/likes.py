"""Like toggles on choices and comments."""

from __future__ import annotations

from flask import Blueprint

from balance_api.api.deps import like_service, require_auth, text_response, timing
from balance_api.services import Identity

bp = Blueprint("likes", __name__)


@bp.post("/<int:game_id>/choice/<int:choice_id>/like")
@require_auth
@timing
def toggle_choice_like(game_id: int, choice_id: int, identity: Identity):
    out = like_service().toggle_choice_like(game_id, choice_id, identity)
    return text_response(out.message)


@bp.post("/<int:game_id>/comment/<int:comment_id>/like")
@require_auth
@timing
def toggle_comment_like(game_id: int, comment_id: int, identity: Identity):
    out = like_service().toggle_comment_like(game_id, comment_id, identity)
    return text_response(out.message)

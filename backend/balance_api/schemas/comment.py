"""Comment resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_load, validate

from balance_api.models.comment import MAX_CONTENT_LENGTH


class CommentInSchema(Schema):
    """Payload for creating or editing a comment."""

    content = fields.String(
        required=True, validate=validate.Length(min=1, max=MAX_CONTENT_LENGTH)
    )

    @pre_load
    def _strip_content(self, data: Any, **kwargs: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("content"), str):
            data = {**data, "content": data["content"].strip()}
        return data


class CommentSchema(Schema):
    """Public representation of a comment."""

    id = fields.Integer(required=True)
    game_id = fields.Integer(required=True)
    author_id = fields.Integer(required=True)
    author_username = fields.String(required=True)
    content = fields.String(required=True)
    like_count = fields.Integer(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)

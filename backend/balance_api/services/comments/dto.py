from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from balance_api.models.comment import Comment


@dataclass(frozen=True, slots=True)
class CommentOut:
    """
    Public projection of a comment.

    :param author_username: Display name of the author.
    :param like_count: Number of users currently liking the comment.
    """

    id: int
    game_id: int
    author_id: int
    author_username: str
    content: str
    like_count: int
    created_at: datetime
    updated_at: datetime


def comment_to_out(row: Comment) -> CommentOut:
    return CommentOut(
        id=row.id,
        game_id=row.game_id,
        author_id=row.author_id,
        author_username=row.author.username,
        content=row.content,
        like_count=len(row.likes),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )

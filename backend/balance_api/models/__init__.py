from balance_api.models.comment import Comment
from balance_api.models.game import Choice, Game
from balance_api.models.like import ChoiceLike, CommentLike
from balance_api.models.refresh_token import RefreshToken
from balance_api.models.user import Role, User

__all__ = [
    "Choice",
    "ChoiceLike",
    "Comment",
    "CommentLike",
    "Game",
    "RefreshToken",
    "Role",
    "User",
]

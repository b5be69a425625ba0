"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from balance_api.repositories.base import BaseRepository
from balance_api.repositories.comment import CommentRepository
from balance_api.repositories.game import ChoiceRepository, GameRepository
from balance_api.repositories.like import (
    ChoiceLikeRepository,
    CommentLikeRepository,
    LikeRepository,
)
from balance_api.repositories.refresh_token import RefreshTokenRepository
from balance_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ChoiceLikeRepository",
    "ChoiceRepository",
    "CommentLikeRepository",
    "CommentRepository",
    "GameRepository",
    "LikeRepository",
    "RefreshTokenRepository",
    "UserRepository",
]

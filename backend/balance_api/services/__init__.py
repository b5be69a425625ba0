"""Service layer public API.

Callers import services and their DTOs from :mod:`balance_api.services`
without knowing the internal layout.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`Identity`
- Session service: :class:`SessionService` with :class:`SignupIn`,
  :class:`LoginIn`, :class:`LoginOut`, :class:`UserOut`, :class:`AuthTokenConfig`
- Like service: :class:`LikeService` with :class:`ToggleLikeOut`,
  :class:`LikeOutcome`, :class:`LikeTarget`
- Comment service: :class:`CommentService` with :class:`CommentOut`
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.dto import Identity
from .comments.dto import CommentOut
from .comments.service import CommentService
from .likes.dto import LikeOutcome, LikeTarget, ToggleLikeOut
from .likes.service import LikeService
from .session.dto import AuthTokenConfig, LoginIn, LoginOut, SignupIn, UserOut
from .session.service import SessionService

__all__ = [
    "AuthTokenConfig",
    "BaseService",
    "CommentOut",
    "CommentService",
    "Identity",
    "LikeOutcome",
    "LikeService",
    "LikeTarget",
    "LoginIn",
    "LoginOut",
    "SessionService",
    "SignupIn",
    "ToggleLikeOut",
    "UserOut",
]

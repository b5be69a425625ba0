"""Convenience exports for request/response schemas."""

from __future__ import annotations

from .auth import LoginSchema, RefreshTokenSchema, SignupSchema
from .comment import CommentInSchema, CommentSchema

__all__ = [
    "CommentInSchema",
    "CommentSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "SignupSchema",
]

"""Route blueprints and their mount points."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .comments import bp as comments_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .likes import bp as likes_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_api_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api
    (users_bp, "/user"),  # -> /api/user
    (comments_bp, "/game"),  # -> /api/game/<id>/comment
    (likes_bp, "/game"),  # -> /api/game/<id>/.../like
]

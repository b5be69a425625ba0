"""HTTP layer: blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` pair below ``base_prefix``.

    Parameters
    ----------
    app:
        Application receiving the blueprints.
    base_prefix:
        Shared prefix, e.g. ``"/api"``.
    entries:
        Pairs such as ``(users_bp, "/user")``; an empty relative prefix
        mounts the blueprint directly on ``base_prefix``.
    """
    root = "/" + base_prefix.strip("/")
    for bp, relative in entries:
        relative = relative.strip("/")
        app.register_blueprint(bp, url_prefix=f"{root}/{relative}" if relative else root)


def init_app(app: Flask) -> None:
    from balance_api.api.v1 import REGISTRY

    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"), entries=REGISTRY
    )


__all__ = ["init_app", "register_blueprint_group"]

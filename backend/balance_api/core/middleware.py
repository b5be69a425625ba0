"""WSGI-level middleware: reverse-proxy headers and CORS for the API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix


def _parse_origins(raw: str | None) -> list[str]:
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


def init_proxy(app: Flask) -> None:
    """Trust one hop of ``X-Forwarded-*`` headers when ``USE_PROXYFIX`` is set."""
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)


def init_cors(app: Flask) -> None:
    """Configure CORS for ``/api/*`` from ``CORS_ORIGINS``.

    A blank value or ``"*"`` allows any origin without credentials. The
    ``Authorization`` header is exposed so browsers can read the access token
    returned by the login and refresh endpoints.
    """
    origins = _parse_origins(app.config.get("CORS_ORIGINS"))
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=["Authorization", "X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )

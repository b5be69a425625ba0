"""WSGI entry point used by gunicorn (``wsgi:app``)."""

from __future__ import annotations

from balance_api import create_app

app = create_app()

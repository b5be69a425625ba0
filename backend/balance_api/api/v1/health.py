"""Liveness plus a database round-trip."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from balance_api.api.deps import json_response, timing
from balance_api.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """``{"status": "ok"|"degraded", "db": "ok"|"fail", "version": ...}``; always 200."""
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        database = "fail"
    finally:
        db.session.rollback()

    return json_response(
        {
            "status": "ok" if database == "ok" else "degraded",
            "db": database,
            "version": current_app.config.get("APP_VERSION", "dev"),
        }
    )

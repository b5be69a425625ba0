"""Unit tests for the logging utilities."""

from __future__ import annotations

import json
import logging

from balance_api.core.logger import JSONFormatter, configure_logging, ensure_request_id


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""
    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging("WARNING")


def test_json_formatter_includes_domain_extras() -> None:
    record = logging.LogRecord("svc", logging.INFO, __file__, 1, "like.toggle", None, None)
    record.game_id = 7
    record.outcome = "liked"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "like.toggle"
    assert payload["game_id"] == 7
    assert payload["outcome"] == "liked"
    assert "target_id" not in payload


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_request_id_generated_outside_requests(app) -> None:
    assert ensure_request_id() != ensure_request_id()

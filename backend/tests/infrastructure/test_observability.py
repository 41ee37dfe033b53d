"""Tests: JSONFormatter and the access-log middleware."""

import json
import logging

from bz_gateway.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "bz_gateway.infrastructure.http_client", logging.INFO, __file__, 1,
        "GET https://behtarzindagi.in -> 200 in 12ms", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(_record(method="GET", status_code=200, duration_ms=12))

    log = json.loads(line)
    assert log["level"] == "INFO"
    assert log["logger"] == "bz_gateway.infrastructure.http_client"
    assert log["method"] == "GET"
    assert log["status_code"] == 200
    assert log["duration_ms"] == 12


def test_json_formatter_skips_unknown_and_empty_extras():
    log = json.loads(JSONFormatter().format(_record(secret="x", error_code=None)))
    assert "secret" not in log
    assert "error_code" not in log


async def test_access_log_line_per_request(client, caplog):
    with caplog.at_level(logging.INFO, logger="bz_gateway.access"):
        response = await client.get("/api/health")

    assert response.status_code == 200
    lines = [r for r in caplog.records if r.name == "bz_gateway.access"]
    assert len(lines) == 1
    assert lines[0].path == "/api/health"
    assert lines[0].status_code == 200

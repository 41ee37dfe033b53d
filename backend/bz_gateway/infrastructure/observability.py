"""Structured Logging — JSON formatter, setup and HTTP access log.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, url, status_code, duration_ms, attempt, error_code) surfaced when present
    - JSON format in production, human-readable in development
    - Every inbound request produces exactly one access-log line

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency, one JSON object per line
    - setup_logging called once on startup via lifespan
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

_EXTRA_KEYS = (
    "method", "url", "path", "status_code", "duration_ms",
    "attempt", "error_code",
)

access_logger = logging.getLogger("bz_gateway.access")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def access_log_middleware(request: Request, call_next):
    """Log method, path, status and duration of every inbound request."""
    started = time.monotonic()
    response = await call_next(request)
    duration_ms = int((time.monotonic() - started) * 1000)
    access_logger.info(
        f"{request.method} {request.url.path} {response.status_code} {duration_ms}ms",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response

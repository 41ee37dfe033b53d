"""Upstream Result Helpers — unwrap normalized results and build success envelopes.

Invariants:
    - ensure_success() returns the result unchanged or raises ExternalAPIError
    - envelope() always sets success=True and a fresh UTC timestamp
"""

import logging
from typing import Any

from bz_gateway.core.api_result import ApiResult, utc_timestamp
from bz_gateway.core.errors import ErrorContext, ExternalAPIError

logger = logging.getLogger(__name__)


def ensure_success(result: ApiResult, failure_message: str, url: str) -> ApiResult:
    """Raise ExternalAPIError carrying the upstream status when the call failed."""
    if not result.success:
        logger.error(
            f"{failure_message}: upstream answered {result.status_code}",
            extra={
                "url": url,
                "status_code": result.status_code,
                "error_code": result.error_code.value if result.error_code else None,
            },
        )
        raise ExternalAPIError(
            failure_message, result, ErrorContext(upstream_url=url),
        )
    return result


def envelope(data: Any, message: str | None = None, **extras: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    body.update(extras)
    body["timestamp"] = utc_timestamp()
    return body


def plain_number(value: float | None) -> int | float | None:
    """2.0 -> 2 so query strings read like the storefront sent them."""
    if value is not None and float(value).is_integer():
        return int(value)
    return value

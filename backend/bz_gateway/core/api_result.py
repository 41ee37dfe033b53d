"""Normalized Result — the single value every outbound call resolves to.

Invariants:
    - success=True  => error is None; `data` carries the decoded upstream body
    - success=False => error is not None; `data` is None
    - timestamp is ISO-8601 UTC, taken when the result is built (never before the call started)
    - to_dict() emits exactly one of "data"/"error"

Design Decisions:
    - Frozen dataclass, not pydantic: built on every upstream call, never validated from input
    - Builders (success_result / failure_result) are the only constructors used outside tests
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from bz_gateway.core.domain_types import ErrorCode


def utc_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and Z suffix (now by default)."""
    now = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ApiResult:
    success: bool
    status_code: int
    data: Any = None
    message: str | None = None
    error: Any = None
    error_code: ErrorCode | None = None
    timestamp: str = field(default_factory=utc_timestamp)

    def __post_init__(self):
        if self.success and self.error is not None:
            raise ValueError("successful ApiResult cannot carry an error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("failed ApiResult must carry an error and no data")

    def to_dict(self) -> dict[str, Any]:
        """Storefront-facing camelCase shape."""
        body: dict[str, Any] = {"success": self.success}
        if self.success:
            body["data"] = self.data
        else:
            body["error"] = self.error
        if self.message is not None:
            body["message"] = self.message
        body["statusCode"] = self.status_code
        if self.error_code is not None:
            body["errorCode"] = self.error_code.value
        body["timestamp"] = self.timestamp
        return body


def success_result(data: Any, status_code: int, message: str | None = None) -> ApiResult:
    return ApiResult(success=True, status_code=status_code, data=data, message=message)


def failure_result(
    message: str,
    error_code: ErrorCode,
    status_code: int,
    error: Any = None,
) -> ApiResult:
    # Upstream may answer with an empty or JSON-null body; keep `error` populated.
    if error is None:
        error = {"message": message}
    return ApiResult(
        success=False,
        status_code=status_code,
        message=message,
        error=error,
        error_code=error_code,
    )

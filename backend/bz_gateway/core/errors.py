"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (ErrorCode), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the storefront envelope {success:false, message, errorCode, statusCode, timestamp}
    - ExternalAPIError reuses the upstream status code as its own http_status
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GatewayError base: one FastAPI handler renders all of them
    - The outbound wrapper never raises these; services raise ExternalAPIError after inspecting an ApiResult
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from bz_gateway.core.api_result import ApiResult, utc_timestamp
from bz_gateway.core.domain_types import ErrorCode


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request-scoped context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    upstream_url: str | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        error: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.error = error

    def to_response(self) -> dict:
        """Convert to the storefront error envelope."""
        body: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "errorCode": self.code.value,
            "statusCode": self.http_status,
            "timestamp": utc_timestamp(self.context.timestamp),
        }
        if self.error is not None:
            body["error"] = self.error
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(GatewayError):
    """Requested row does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        code: ErrorCode,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(GatewayError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str, code: ErrorCode, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ConflictError(GatewayError):
    """Unique constraint hit (duplicate email or phone)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorCode.DUPLICATE_RESOURCE, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(GatewayError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCode.DATABASE_ERROR, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ExternalAPIError(GatewayError):
    """Upstream call resolved to a failed ApiResult."""
    def __init__(self, message: str, result: ApiResult, context: ErrorContext | None = None):
        super().__init__(
            message,
            result.error_code or ErrorCode.EXTERNAL_API_ERROR,
            ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR,
            context,
            result.status_code or 500,
            result.error,
        )
        self.result = result

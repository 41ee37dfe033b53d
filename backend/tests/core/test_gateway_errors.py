"""Tests: error hierarchy — codes, HTTP statuses and the storefront error envelope."""

import re
from datetime import datetime, timezone

from bz_gateway.core.api_result import failure_result
from bz_gateway.core.domain_types import ErrorCode
from bz_gateway.core.errors import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ExternalAPIError,
    ResourceNotFoundError,
)


def test_external_api_error_reuses_upstream_status():
    result = failure_result(
        "API returned error", ErrorCode.EXTERNAL_API_ERROR, 404, {"Message": "missing"},
    )
    exc = ExternalAPIError("Failed to fetch products", result)

    body = exc.to_response()
    assert exc.http_status == 404
    assert body == {
        "success": False,
        "message": "Failed to fetch products",
        "errorCode": "EXTERNAL_API_ERROR",
        "statusCode": 404,
        "timestamp": body["timestamp"],
        "error": {"Message": "missing"},
    }


def test_external_api_error_keeps_network_code():
    result = failure_result(
        "Network error", ErrorCode.NETWORK_ERROR, 503, {"type": "ConnectError", "detail": ""},
    )
    exc = ExternalAPIError("Failed to send OTP", result)
    assert exc.code == ErrorCode.NETWORK_ERROR
    assert exc.http_status == 503
    assert exc.category == ErrorCategory.EXTERNAL_API


def test_not_found_uses_given_code():
    exc = ResourceNotFoundError("Website user", "abc", ErrorCode.USER_NOT_FOUND)
    assert exc.http_status == 404
    assert exc.to_response()["errorCode"] == "USER_NOT_FOUND"
    assert "error" not in exc.to_response()


def test_auth_conflict_database_statuses():
    assert AuthenticationError("x", ErrorCode.AUTH_TOKEN_REQUIRED).http_status == 401
    assert ConflictError("dup").code == ErrorCode.DUPLICATE_RESOURCE
    assert ConflictError("dup").http_status == 409
    db = DatabaseError("Connection or operational error", "execute")
    assert db.http_status == 503
    assert db.message == "Database execute failed: Connection or operational error"


def test_error_timestamp_matches_success_envelopes():
    moment = datetime(2024, 3, 5, 10, 15, 30, 123456, tzinfo=timezone.utc)
    exc = ConflictError("Email or phone already registered", ErrorContext(timestamp=moment))

    assert exc.to_response()["timestamp"] == "2024-03-05T10:15:30.123Z"
    fresh = ConflictError("dup").to_response()["timestamp"]
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", fresh)

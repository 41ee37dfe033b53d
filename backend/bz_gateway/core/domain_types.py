"""Domain Types — enums shared by the HTTP wrapper, services and routes.

Invariants:
    - ErrorCode values are the machine-readable codes the storefront sees in `errorCode`
    - HttpMethod values are upper-case verbs passed straight to httpx
    - All enums are str Enums so they serialize into JSON envelopes without encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Verbs the outbound wrapper accepts."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ErrorCode(str, Enum):
    """Machine-readable error codes surfaced in every failure envelope."""
    EXTERNAL_API_ERROR = "EXTERNAL_API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    FOOTER_ICON_NOT_FOUND = "FOOTER_ICON_NOT_FOUND"
    AUTH_TOKEN_REQUIRED = "AUTH_TOKEN_REQUIRED"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"


class LocationLevel(str, Enum):
    """`type` codes for the state/district/block/village lookup."""
    STATE = "S"
    DISTRICT = "D"
    BLOCK = "B"
    VILLAGE = "V"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

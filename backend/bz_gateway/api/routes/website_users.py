"""Website User Routes — account CRUD, password login and OTP login.

Invariants:
    - Create and list require a valid access token; the rest mirror the storefront's public calls
    - Successful login and OTP verification return a user block plus a lifetime token pair
    - POST verify-otp answers a rejected OTP with 401 AUTH_INVALID_CREDENTIALS
    - GET verify-otp-get answers every failure with the legacy {UserDetails:"", LoginStatus:"error", Status:false}

Design Decisions:
    - Static paths (login, search, stats/active, *-otp*) are declared before /{user_id}
    - The legacy GET variants exist for the old storefront build and are kept byte-compatible
"""

import logging
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from bz_gateway.api.dependencies import (
    get_otp_service, get_token_service, get_website_user_service, require_auth,
)
from bz_gateway.core.api_result import utc_timestamp
from bz_gateway.core.domain_types import ErrorCode
from bz_gateway.core.errors import AuthenticationError, GatewayError
from bz_gateway.infrastructure.jwt_tokens import TokenService
from bz_gateway.schemas.website_user import (
    LoginRequest,
    SendOtpRequest,
    UserListQuery,
    UserSearchQuery,
    VerifyOtpRequest,
    WebsiteUserCreate,
    WebsiteUserResponse,
    WebsiteUserUpdate,
)
from bz_gateway.services.otp_service import OtpService
from bz_gateway.services.upstream import envelope
from bz_gateway.services.website_user_service import (
    WebsiteUserService, phone_email, public_user, token_claims,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/website-users", tags=["website-users"])

Users = Annotated[WebsiteUserService, Depends(get_website_user_service)]
Otp = Annotated[OtpService, Depends(get_otp_service)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
Claims = Annotated[dict[str, Any], Depends(require_auth)]

_LEGACY_OTP_FAILURE = {"UserDetails": "", "LoginStatus": "error", "Status": False}


def _serialize(user) -> dict[str, Any]:
    return WebsiteUserResponse.model_validate(user).model_dump(mode="json", by_alias=True)


def _page(users, total: int, page: int, limit: int) -> dict[str, Any]:
    return envelope(
        [_serialize(u) for u in users],
        pagination={
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": (total + limit - 1) // limit,
        },
    )


# ─── Auth ────────────────────────────────────────────────────────

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: WebsiteUserCreate, users: Users, claims: Claims):
    user = await users.create_user(body)
    logger.info(f"User {user.id} created by {claims.get('id')}")
    return envelope(_serialize(user), "Website user created successfully")


@router.post("/login")
async def login(body: LoginRequest, request: Request, users: Users, tokens: Tokens):
    user = await users.authenticate(body.email, body.password)
    if not user:
        raise AuthenticationError(
            "Invalid email or password", ErrorCode.AUTH_INVALID_CREDENTIALS,
        )
    await users.record_login(
        user,
        request.client.host if request.client else None,
        request.headers.get("user-agent"),
    )
    return envelope(
        {"user": public_user(user), "tokens": tokens.issue_token_pair(token_claims(user))},
        "Login successful",
    )


@router.post("/send-otp")
async def send_otp(body: SendOtpRequest, otp: Otp):
    data = await otp.send_otp(body.name, body.number)
    return envelope(data, "OTP sent successfully")


@router.post("/verify-otp")
async def verify_otp(body: VerifyOtpRequest, otp: Otp, users: Users, tokens: Tokens):
    verification = await otp.verify_otp(body.name, body.number, body.otp)
    if not verification.verified:
        raise AuthenticationError(
            "OTP verification failed", ErrorCode.AUTH_INVALID_CREDENTIALS,
        )
    user = await users.find_or_create_by_phone(body.number, body.name)
    claims = token_claims(user)
    claims["firstName"] = user.first_name or body.name
    user_block = public_user(user)
    user_block["phone"] = body.number
    user_block["firstName"] = claims["firstName"]
    return envelope(
        {
            "user": user_block,
            "tokens": tokens.issue_token_pair(claims),
            "otpVerification": verification.to_dict(),
        },
        "OTP verified successfully and user authenticated",
    )


@router.get("/send-otp-get")
async def send_otp_get(
    otp: Otp,
    name: str = Query(alias="Name", min_length=1),
    number: str = Query(alias="Number", min_length=1),
):
    data = await otp.send_otp(name, number)
    return envelope(data, "OTP sent successfully")


@router.get("/verify-otp-get")
async def verify_otp_get(
    otp: Otp,
    tokens: Tokens,
    name: str = Query("", alias="Name"),
    number: str = Query("", alias="Number"),
    code: str = Query("", alias="OTP"),
):
    """Legacy GET verification: failures come back as a 200 legacy body, not an error."""
    try:
        verification = await otp.verify_otp(name, number, code)
    except GatewayError as e:
        logger.warning(f"verify-otp-get failed: {e.message}")
        return dict(_LEGACY_OTP_FAILURE)
    if not verification.verified:
        return dict(_LEGACY_OTP_FAILURE)

    details = verification.user_details
    first = details[0] if isinstance(details, list) and details else {}
    if not isinstance(first, dict):
        first = {}
    claims = {
        "id": first.get("UserId") or 0,
        "email": phone_email(number),
        "firstName": first.get("FirstName") or name,
        "lastName": first.get("LastName") or "",
        "role": "user",
    }
    raw = verification.raw if isinstance(verification.raw, dict) else {}
    return {
        "success": True,
        "LoginStatus": "success",
        "Status": "true",
        "message": "OTP verified successfully",
        "ds": raw.get("ds") or {"UserDetails": []},
        "userDetails": details,
        "data": {
            "tokens": tokens.issue_token_pair(claims),
            "otpVerification": verification.to_dict(),
        },
        "timestamp": utc_timestamp(),
    }


# ─── Queries ─────────────────────────────────────────────────────

@router.get("")
async def list_users(query: Annotated[UserListQuery, Query()], users: Users, claims: Claims):
    found, total = await users.list_users(query.page, query.limit)
    return _page(found, total, query.page, query.limit)


@router.get("/search")
async def search_users(query: Annotated[UserSearchQuery, Query()], users: Users):
    found, total = await users.search_users(query.q, query.page, query.limit)
    return _page(found, total, query.page, query.limit)


@router.get("/stats/active")
async def active_users_count(users: Users):
    return envelope({"activeUsers": await users.count_active()})


# ─── Single user ─────────────────────────────────────────────────

@router.get("/{user_id}")
async def get_user(user_id: UUID, users: Users):
    return envelope(_serialize(await users.get_user(user_id)))


@router.patch("/{user_id}")
async def update_user(user_id: UUID, body: WebsiteUserUpdate, users: Users):
    user = await users.update_user(user_id, body)
    return envelope(_serialize(user), "Website user updated successfully")


@router.delete("/{user_id}")
async def delete_user(user_id: UUID, users: Users):
    deleted = await users.delete_user(user_id)
    return {
        "success": deleted,
        "message": "User deleted successfully" if deleted else "User not found",
        "timestamp": utc_timestamp(),
    }

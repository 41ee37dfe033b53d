"""API Dependencies — FastAPI providers for the HTTP client, services and authentication.

Invariants:
    - The ResilientHttpClient comes from app.state (set by the lifespan), never from a module global
    - require_auth accepts "Authorization: Bearer <jwt>" or the authToken / token cookies
    - require_auth raises AuthenticationError (401) for missing, invalid or expired tokens
"""

from typing import Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bz_gateway.config import get_settings
from bz_gateway.core.domain_types import ErrorCode
from bz_gateway.core.errors import AuthenticationError
from bz_gateway.infrastructure.database import get_db
from bz_gateway.infrastructure.http_client import ResilientHttpClient
from bz_gateway.infrastructure.jwt_tokens import TokenService
from bz_gateway.services.cart_service import CartService
from bz_gateway.services.catalog_service import CatalogService
from bz_gateway.services.footer_icon_service import FooterIconService
from bz_gateway.services.order_service import OrderService
from bz_gateway.services.otp_service import OtpService
from bz_gateway.services.tracking_service import (
    EventTrackingService, WebsiteTrafficService,
)
from bz_gateway.services.website_user_service import WebsiteUserService

_TOKEN_COOKIES = ("authToken", "token")


def get_http_client(request: Request) -> ResilientHttpClient:
    return request.app.state.http_client


def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(settings.jwt_secret, settings.jwt_refresh_secret)


# ─── Upstream proxy services ─────────────────────────────────────

def get_catalog_service(
    client: ResilientHttpClient = Depends(get_http_client),
) -> CatalogService:
    return CatalogService(client)


def get_cart_service(
    client: ResilientHttpClient = Depends(get_http_client),
) -> CartService:
    return CartService(client)


def get_order_service(
    client: ResilientHttpClient = Depends(get_http_client),
) -> OrderService:
    return OrderService(client)


def get_otp_service(
    client: ResilientHttpClient = Depends(get_http_client),
) -> OtpService:
    return OtpService(client)


# ─── Persistence services ────────────────────────────────────────

def get_website_user_service(db: AsyncSession = Depends(get_db)) -> WebsiteUserService:
    return WebsiteUserService(db)


def get_footer_icon_service(db: AsyncSession = Depends(get_db)) -> FooterIconService:
    return FooterIconService(db)


def get_traffic_service(db: AsyncSession = Depends(get_db)) -> WebsiteTrafficService:
    return WebsiteTrafficService(db)


def get_event_service(db: AsyncSession = Depends(get_db)) -> EventTrackingService:
    return EventTrackingService(db)


# ─── Auth ────────────────────────────────────────────────────────

def extract_token(request: Request) -> str | None:
    header = request.headers.get("authorization")
    if header:
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    for cookie in _TOKEN_COOKIES:
        value = request.cookies.get(cookie)
        if value:
            return value
    return None


def require_auth(
    request: Request, tokens: TokenService = Depends(get_token_service),
) -> dict[str, Any]:
    """Verified access-token claims of the caller."""
    token = extract_token(request)
    if not token:
        raise AuthenticationError(
            "Authentication token is required", ErrorCode.AUTH_TOKEN_REQUIRED,
        )
    claims = tokens.verify_access_token(token)
    request.state.user = claims
    return claims

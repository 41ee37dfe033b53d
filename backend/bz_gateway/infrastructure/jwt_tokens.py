"""JWT Tokens — HS256 access/refresh token issuing and verification via PyJWT.

Invariants:
    - Access tokens carry id, email, firstName, lastName, role; signed with jwt_secret
    - Refresh tokens carry id, email, type="refresh"; signed with jwt_refresh_secret
    - Tokens are lifetime tokens: no exp claim is issued, but an exp present on a token is honored
    - Verification failures raise AuthenticationError, never a PyJWT exception

Design Decisions:
    - Separate secrets for access and refresh: a leaked refresh secret cannot mint access tokens
"""

import logging
import time
from typing import Any

import jwt

from bz_gateway.core.domain_types import ErrorCode
from bz_gateway.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_TYPE = "Bearer"
TOKEN_LIFETIME = "lifetime"


class TokenService:
    def __init__(self, secret: str, refresh_secret: str):
        self.secret = secret
        self.refresh_secret = refresh_secret

    def issue_access_token(self, claims: dict[str, Any]) -> str:
        payload = {
            "id": str(claims.get("id")),
            "email": claims.get("email"),
            "firstName": claims.get("firstName"),
            "lastName": claims.get("lastName"),
            "role": claims.get("role") or "user",
            "iat": int(time.time()),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def issue_refresh_token(self, claims: dict[str, Any]) -> str:
        payload = {
            "id": str(claims.get("id")),
            "email": claims.get("email"),
            "type": "refresh",
            "iat": int(time.time()),
        }
        return jwt.encode(payload, self.refresh_secret, algorithm=ALGORITHM)

    def issue_token_pair(self, claims: dict[str, Any]) -> dict[str, str]:
        """Token block returned by login and OTP verification."""
        return {
            "accessToken": self.issue_access_token(claims),
            "refreshToken": self.issue_refresh_token(claims),
            "tokenType": TOKEN_TYPE,
            "expiresIn": TOKEN_LIFETIME,
        }

    def verify_access_token(self, token: str) -> dict[str, Any]:
        return self._verify(token, self.secret)

    def _verify(self, token: str, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(
                "Token has expired", ErrorCode.AUTH_TOKEN_EXPIRED,
            ) from None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected token: {e}")
            raise AuthenticationError(
                "Invalid token", ErrorCode.AUTH_TOKEN_INVALID,
            ) from None

"""OTP Service — phone login via the upstream CentraliseLogin / CentraliseVerifyLogin endpoints.

Invariants:
    - send_otp raises ExternalAPIError when the upstream call fails
    - verify_otp distinguishes transport failure (raises) from a wrong OTP (returns verified=False)
    - A wrong OTP is detected by LoginStatus == "error" or Status is False in the upstream body
"""

import logging
from dataclasses import dataclass
from typing import Any

from bz_gateway.core import upstream_urls as urls
from bz_gateway.infrastructure.http_client import ResilientHttpClient
from bz_gateway.services.upstream import ensure_success

logger = logging.getLogger(__name__)

# Source codes the upstream expects for web-originated OTP requests.
_FROM_SOURCE = 1
_TO_SOURCE = 0


@dataclass
class OtpVerification:
    verified: bool
    phone_number: str
    name: str
    login_status: str
    user_details: Any = None
    raw: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "phoneNumber": self.phone_number,
            "name": self.name,
            "loginStatus": self.login_status,
            "userDetails": self.user_details,
            "status": self.verified,
        }


class OtpService:
    def __init__(self, client: ResilientHttpClient):
        self.client = client

    async def send_otp(self, name: str, number: str) -> dict[str, Any]:
        logger.info(f"Sending OTP to {_mask(number)}")
        params = {
            "Name": name,
            "Number": number,
            "FromSource": _FROM_SOURCE,
            "ToSource": _TO_SOURCE,
        }
        result = await self.client.get(urls.OTP_SEND_URL, params)
        ensure_success(result, "Failed to send OTP", urls.OTP_SEND_URL)
        status = True
        if isinstance(result.data, dict) and "Status" in result.data:
            status = result.data["Status"]
        return {"phoneNumber": number, "name": name, "status": status}

    async def verify_otp(self, name: str, number: str, otp: str) -> OtpVerification:
        logger.info(f"Verifying OTP for {_mask(number)}")
        params = {"Name": name, "Number": number, "OTP": otp}
        result = await self.client.get(urls.OTP_VERIFY_URL, params)
        ensure_success(result, "Failed to verify OTP", urls.OTP_VERIFY_URL)

        body = result.data if isinstance(result.data, dict) else {}
        if body.get("LoginStatus") == "error" or body.get("Status") is False:
            logger.warning(f"OTP rejected for {_mask(number)}")
            return OtpVerification(
                verified=False, phone_number=number, name=name,
                login_status="error", raw=result.data,
            )

        ds = body.get("ds")
        user_details = None
        if isinstance(ds, dict):
            user_details = ds.get("UserDetails")
        if not user_details:
            user_details = body.get("UserDetails")
        return OtpVerification(
            verified=True,
            phone_number=number,
            name=name,
            login_status=body.get("LoginStatus") or "success",
            user_details=user_details or None,
            raw=result.data,
        )


def _mask(number: str) -> str:
    return f"******{number[-4:]}" if len(number) > 4 else number

"""Tests: OtpService — send/verify against the CentraliseLogin endpoints.

Invariants:
    - A rejected OTP is a verified=False result, not an exception
    - Transport failure raises ExternalAPIError
"""

import httpx
import pytest

from bz_gateway.core import upstream_urls as urls
from bz_gateway.core.errors import ExternalAPIError
from bz_gateway.services.otp_service import OtpService


@pytest.fixture
def otp(http_client):
    return OtpService(http_client)


async def test_send_otp_sends_web_source_codes(otp, upstream):
    upstream.on(urls.OTP_SEND_URL, (200, {"Status": True}))

    result = await otp.send_otp("Ramesh Kumar", "9876543210")

    params = dict(upstream.last(urls.OTP_SEND_URL).url.params)
    assert params == {
        "Name": "Ramesh Kumar", "Number": "9876543210", "FromSource": "1", "ToSource": "0",
    }
    assert result == {"phoneNumber": "9876543210", "name": "Ramesh Kumar", "status": True}


async def test_send_otp_failure_raises(otp, upstream):
    upstream.on(urls.OTP_SEND_URL, httpx.ConnectError("refused"))

    with pytest.raises(ExternalAPIError) as exc:
        await otp.send_otp("Ramesh", "9876543210")
    assert exc.value.http_status == 503


async def test_verify_otp_reads_nested_user_details(otp, upstream):
    details = [{"FarmerId": 42, "Name": "Ramesh"}]
    upstream.on(urls.OTP_VERIFY_URL, (200, {"LoginStatus": "success", "ds": {"UserDetails": details}}))

    verification = await otp.verify_otp("Ramesh", "9876543210", "12345")

    assert verification.verified is True
    assert verification.user_details == details
    assert upstream.last(urls.OTP_VERIFY_URL).url.params["OTP"] == "12345"
    assert verification.to_dict()["status"] is True
    assert verification.to_dict()["loginStatus"] == "success"


async def test_verify_otp_falls_back_to_top_level_details(otp, upstream):
    upstream.on(urls.OTP_VERIFY_URL, (200, {"UserDetails": [{"FarmerId": 7}]}))

    verification = await otp.verify_otp("Ramesh", "9876543210", "12345")

    assert verification.user_details == [{"FarmerId": 7}]
    assert verification.login_status == "success"


@pytest.mark.parametrize("body", [
    {"LoginStatus": "error"},
    {"Status": False, "UserDetails": ""},
])
async def test_verify_otp_rejection(otp, upstream, body):
    upstream.on(urls.OTP_VERIFY_URL, (200, body))

    verification = await otp.verify_otp("Ramesh", "9876543210", "00000")

    assert verification.verified is False
    assert verification.login_status == "error"
    assert verification.raw == body

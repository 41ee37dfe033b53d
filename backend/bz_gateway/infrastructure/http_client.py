"""Resilient HTTP Client — wraps httpx.AsyncClient with pooling, retry, backoff and result normalization.

Invariants:
    - Never raises for 4xx, 5xx, timeouts or network failures: every outcome becomes an ApiResult
    - 4xx: exactly one attempt, no retry
    - 5xx, timeouts, network failures: up to max_retries extra attempts, sleeping base * 2**attempt seconds
    - Caller headers override DEFAULT_HEADERS key by key, case-insensitively
    - Raises only for invalid RequestDescriptor values (programmer error)

Design Decisions:
    - One client per process, opened in the FastAPI lifespan and closed on shutdown
    - Bodies are opaque JSON at this boundary: no schema is imposed on upstream payloads
    - No jitter on backoff: the upstream is a single origin, not a shared rate-limited API
    - Retrying a non-idempotent POST can duplicate the upstream side effect (known, unhandled)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from bz_gateway.core.api_result import ApiResult, failure_result, success_result
from bz_gateway.core.domain_types import ErrorCode, HttpMethod

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 2

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: dict[str, str] = {
    "accept": "application/json, text/plain, */*",
    "accept-language": "en-IN,en-GB;q=0.9,en-US;q=0.8,en;q=0.7",
    "content-type": "application/json",
    "origin": "https://behtarzindagi.in",
    "referer": "https://behtarzindagi.in/",
    "user-agent": _USER_AGENT,
}

# No response reached us: retried, then reported as NETWORK_ERROR.
_TRANSPORT_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound call. Built fresh per invocation, never mutated."""
    url: str
    method: HttpMethod = HttpMethod.GET
    body: Any = None
    params: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    timeout: float | None = None

    def __post_init__(self):
        if not isinstance(self.url, str) or not self.url.strip():
            raise ValueError("RequestDescriptor.url must be a non-empty string")
        if isinstance(self.method, str) and not isinstance(self.method, HttpMethod):
            try:
                object.__setattr__(self, "method", HttpMethod(self.method.upper()))
            except ValueError:
                raise ValueError(f"Unsupported HTTP method: {self.method!r}") from None
        if not isinstance(self.method, HttpMethod):
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("RequestDescriptor.timeout must be positive")


class ResilientHttpClient:
    """Pooled httpx client that turns every upstream outcome into an ApiResult."""

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_base_seconds: float = 1.0,
        max_connections: int = 50,
        max_keepalive_connections: int = 10,
        keepalive_expiry: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.backoff_base_seconds = backoff_base_seconds
        self.client = httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=httpx.Timeout(timeout_seconds),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
                keepalive_expiry=keepalive_expiry,
            ),
            follow_redirects=True,
            transport=transport,
        )

    async def request(
        self, descriptor: RequestDescriptor, max_retries: int | None = None,
    ) -> ApiResult:
        """Send the descriptor, retrying transient failures, and normalize the outcome."""
        retries = self.max_retries if max_retries is None else max_retries
        if retries < 0:
            raise ValueError("max_retries must be >= 0")

        method = descriptor.method.value
        started = time.monotonic()
        logger.info(
            f"{method} {descriptor.url}",
            extra={"method": method, "url": descriptor.url},
        )

        for attempt in range(retries + 1):
            try:
                response = await self._send(descriptor)

            except _TRANSPORT_ERRORS as e:
                if attempt < retries:
                    await self._backoff(attempt, retries, f"{type(e).__name__}: {e}")
                    continue
                result = failure_result(
                    "Network error", ErrorCode.NETWORK_ERROR, 503,
                    {"type": type(e).__name__, "detail": str(e)},
                )
                return self._finish(descriptor, result, started, attempt)

            except Exception as e:
                logger.error(
                    f"Unexpected error calling {descriptor.url}: {e}",
                    exc_info=True,
                    extra={"method": method, "url": descriptor.url},
                )
                result = failure_result(
                    "Internal server error", ErrorCode.INTERNAL_ERROR, 500,
                    {"type": type(e).__name__, "detail": str(e)},
                )
                return self._finish(descriptor, result, started, attempt)

            status = response.status_code
            if status >= 500:
                if attempt < retries:
                    await self._backoff(attempt, retries, f"HTTP {status}")
                    continue
                result = failure_result(
                    "External API error", ErrorCode.EXTERNAL_API_ERROR,
                    status, _read_body(response),
                )
            elif status >= 400:
                result = failure_result(
                    "API returned error", ErrorCode.EXTERNAL_API_ERROR,
                    status, _read_body(response),
                )
            else:
                result = success_result(_read_body(response), status)
            return self._finish(descriptor, result, started, attempt)

        raise AssertionError("unreachable: retry loop always returns")

    # ─── Verb shortcuts ──────────────────────────────────────────

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> ApiResult:
        descriptor = RequestDescriptor(
            url, HttpMethod.GET, params=params, headers=headers, timeout=timeout,
        )
        return await self.request(descriptor, max_retries)

    async def post(
        self,
        url: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> ApiResult:
        descriptor = RequestDescriptor(
            url, HttpMethod.POST, body=body, headers=headers, timeout=timeout,
        )
        return await self.request(descriptor, max_retries)

    async def put(
        self,
        url: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> ApiResult:
        descriptor = RequestDescriptor(
            url, HttpMethod.PUT, body=body, headers=headers, timeout=timeout,
        )
        return await self.request(descriptor, max_retries)

    async def patch(
        self,
        url: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> ApiResult:
        descriptor = RequestDescriptor(
            url, HttpMethod.PATCH, body=body, headers=headers, timeout=timeout,
        )
        return await self.request(descriptor, max_retries)

    async def delete(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> ApiResult:
        descriptor = RequestDescriptor(
            url, HttpMethod.DELETE, headers=headers, timeout=timeout,
        )
        return await self.request(descriptor, max_retries)

    async def aclose(self) -> None:
        """Drain the connection pool."""
        await self.client.aclose()

    async def __aenter__(self) -> "ResilientHttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ─── Internals ───────────────────────────────────────────────

    async def _send(self, descriptor: RequestDescriptor) -> httpx.Response:
        headers = httpx.Headers(DEFAULT_HEADERS)
        if descriptor.headers:
            headers.update(descriptor.headers)
        kwargs: dict[str, Any] = {}
        if descriptor.body is not None:
            kwargs["json"] = descriptor.body
        return await self.client.request(
            descriptor.method.value,
            descriptor.url,
            params=_clean_params(descriptor.params),
            headers=headers,
            timeout=descriptor.timeout or self.timeout_seconds,
            **kwargs,
        )

    async def _backoff(self, attempt: int, retries: int, reason: str) -> None:
        """Sleep base * 2**attempt seconds before the next attempt."""
        delay = self.backoff_base_seconds * (2 ** attempt)
        logger.warning(
            f"Retryable failure ({reason}), retry {attempt + 1}/{retries} after {delay}s",
            extra={"attempt": attempt + 1},
        )
        await self._sleep(delay)

    async def _sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def _finish(
        self, descriptor: RequestDescriptor, result: ApiResult, started: float, attempt: int,
    ) -> ApiResult:
        duration_ms = int((time.monotonic() - started) * 1000)
        level = logging.INFO if result.success else logging.WARNING
        logger.log(
            level,
            f"{descriptor.method.value} {descriptor.url} -> {result.status_code} in {duration_ms}ms",
            extra={
                "method": descriptor.method.value,
                "url": descriptor.url,
                "status_code": result.status_code,
                "duration_ms": duration_ms,
                "attempt": attempt + 1,
                "error_code": result.error_code.value if result.error_code else None,
            },
        )
        return result


def _read_body(response: httpx.Response) -> Any:
    """Decoded JSON when the body parses, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop None-valued query parameters; keep falsy values like 0."""
    if not params:
        return None
    return {key: value for key, value in params.items() if value is not None}


def build_http_client(settings) -> ResilientHttpClient:
    """Build the process-wide client from Settings."""
    return ResilientHttpClient(
        timeout_seconds=settings.external_api_timeout_seconds,
        max_retries=settings.external_api_max_retries,
        backoff_base_seconds=settings.external_api_backoff_base_seconds,
        max_connections=settings.http_pool_max_connections,
        max_keepalive_connections=settings.http_pool_max_keepalive,
        keepalive_expiry=settings.http_pool_keepalive_seconds,
    )

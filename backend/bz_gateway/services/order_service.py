"""Order Service — order creation, payments, order tracking and farmer profile updates.

Invariants:
    - Every method returns the upstream body unchanged (the checkout flow reads legacy keys directly)
    - Open request bodies are forwarded as received, apart from the Farmer defaults in create_order

Design Decisions:
    - dict bodies, not models: these payloads are large, upstream-owned and change without notice
"""

import logging
from typing import Any

from bz_gateway.core import upstream_urls as urls
from bz_gateway.infrastructure.http_client import ResilientHttpClient
from bz_gateway.services.upstream import ensure_success

logger = logging.getLogger(__name__)

# Upstream rejects orders where these Farmer keys are missing rather than empty.
_FARMER_DEFAULTS = {"FatherName": "", "OtherVillageName": ""}


class OrderService:
    def __init__(self, client: ResilientHttpClient):
        self.client = client

    async def _post(self, url: str, body: Any, failure_message: str) -> Any:
        result = await self.client.post(url, body)
        ensure_success(result, failure_message, url)
        return result.data

    async def _get(self, url: str, params: dict[str, Any], failure_message: str) -> Any:
        result = await self.client.get(url, params)
        ensure_success(result, failure_message, url)
        return result.data

    # ─── Orders ──────────────────────────────────────────────────

    async def create_order(self, order: dict[str, Any]) -> Any:
        payload = dict(order)
        farmer = payload.get("Farmer")
        if isinstance(farmer, dict):
            payload["Farmer"] = {**farmer}
            for key, default in _FARMER_DEFAULTS.items():
                if payload["Farmer"].get(key) is None:
                    payload["Farmer"][key] = default
        return await self._post(urls.CREATE_ORDER_URL, payload, "Failed to create order")

    async def update_order_status(self, all_order_ids: str, payment_status: str) -> Any:
        params = {"AllOrderids": all_order_ids, "PaymentStatus": payment_status}
        return await self._get(
            urls.UPDATE_ORDER_STATUS_URL, params, "Failed to update order status",
        )

    async def order_history(self, farmer_id: str) -> Any:
        return await self._get(
            urls.ORDER_HISTORY_URL, {"Farmerid": farmer_id}, "Failed to fetch order history",
        )

    async def product_cancel_status(self, type_id: str) -> Any:
        return await self._get(
            urls.PRODUCT_CANCEL_STATUS_URL, {"typeid": type_id},
            "Failed to fetch product cancel status",
        )

    async def order_status(self, record_id: str, order_id: str) -> Any:
        params = {"recordid": record_id, "orderid": order_id}
        return await self._get(urls.ORDER_STATUS_URL, params, "Failed to fetch order status")

    async def cancel_order(self, body: dict[str, Any]) -> Any:
        return await self._post(urls.CANCEL_ORDER_URL, body, "Failed to cancel order")

    # ─── Payments ────────────────────────────────────────────────

    async def map_partner_order(self, body: dict[str, Any]) -> Any:
        return await self._post(
            urls.MAP_PARTNER_ORDER_URL, body, "Failed to map partner order",
        )

    async def accept_payment(self, body: dict[str, Any]) -> Any:
        return await self._post(
            urls.ACCEPT_PAYMENT_URL, body, "Failed to accept payment request",
        )

    async def complete_payment(self, body: dict[str, Any]) -> Any:
        return await self._post(
            urls.COMPLETE_PAYMENT_URL, body, "Failed to complete payment request",
        )

    # ─── Farmer profile ──────────────────────────────────────────

    async def update_farmer_data(self, body: dict[str, Any]) -> Any:
        if not body.get("Mobile"):
            logger.warning("UpdateFarmerData called without Mobile")
        return await self._post(
            urls.UPDATE_FARMER_DATA_URL, body, "Failed to update farmer data",
        )

    async def location_lookup(self, api_key: str, location_id: int, level: str) -> Any:
        params = {"apiKey": api_key, "id": location_id, "type": level}
        return await self._get(
            urls.LOCATION_LOOKUP_URL, params, "Failed to fetch location data",
        )

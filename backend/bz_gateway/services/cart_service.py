"""Cart Service — cart contents, cart mutations, saved addresses and coupons."""

import logging
from typing import Any

from bz_gateway.core import upstream_urls as urls
from bz_gateway.infrastructure.http_client import ResilientHttpClient
from bz_gateway.schemas.cart import (
    ActiveCouponsQuery,
    AddToCartRequest,
    CartItemsQuery,
    FarmerAddressQuery,
    VerifyCouponQuery,
)
from bz_gateway.services.upstream import ensure_success, envelope

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, client: ResilientHttpClient):
        self.client = client

    async def cart_items(self, query: CartItemsQuery) -> dict[str, Any]:
        params = {"MobileNo": query.MobileNo}
        result = await self.client.get(urls.CART_ITEMS_URL, params)
        ensure_success(result, "Failed to fetch cart items", urls.CART_ITEMS_URL)
        return envelope(result.data, queryParams=params)

    async def update_cart(self, request: AddToCartRequest) -> dict[str, Any]:
        """Add or remove one product; Quantity is only sent when the caller gave one."""
        body: dict[str, Any] = {
            "InType": request.InType,
            "MobileNo": request.MobileNo,
            "BzProductId": request.BzProductId,
        }
        if request.Quantity is not None:
            body["Quantity"] = request.Quantity
        logger.info(f"Cart {request.InType} for product {request.BzProductId}")
        result = await self.client.post(urls.ADD_TO_CART_URL, body)
        ensure_success(
            result, f"Failed to {request.InType.lower()} item to cart", urls.ADD_TO_CART_URL,
        )
        return envelope(result.data, requestData=body)

    async def farmer_address(self, query: FarmerAddressQuery) -> Any:
        """Raw upstream body: the storefront reads the legacy shape directly."""
        params: dict[str, Any] = {"FarmerID": query.FarmerID}
        if query.Version:
            params["Version"] = query.Version
        result = await self.client.get(urls.FARMER_ADDRESS_URL, params)
        ensure_success(result, "Failed to fetch farmer address", urls.FARMER_ADDRESS_URL)
        return result.data

    async def active_coupons(self, query: ActiveCouponsQuery) -> dict[str, Any]:
        params = {"PackageId": query.PackageId}
        result = await self.client.get(urls.ACTIVE_COUPONS_URL, params)
        ensure_success(result, "Failed to fetch active coupons", urls.ACTIVE_COUPONS_URL)
        return envelope(result.data, queryParams=params)

    async def verify_coupon(self, query: VerifyCouponQuery) -> dict[str, Any]:
        params = query.model_dump()
        result = await self.client.get(urls.COUPON_VALIDITY_URL, params)
        ensure_success(result, "Failed to verify coupon", urls.COUPON_VALIDITY_URL)
        return envelope(result.data, queryParams=params)

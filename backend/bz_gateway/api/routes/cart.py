"""Cart Routes — cart items, cart mutations, farmer address and coupons."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bz_gateway.api.dependencies import get_cart_service
from bz_gateway.schemas.cart import (
    ActiveCouponsQuery,
    AddToCartRequest,
    CartItemsQuery,
    FarmerAddressQuery,
    VerifyCouponQuery,
)
from bz_gateway.services.cart_service import CartService

router = APIRouter(prefix="/api/products", tags=["cart"])

Cart = Annotated[CartService, Depends(get_cart_service)]


@router.get("/cart-items")
async def cart_items(query: Annotated[CartItemsQuery, Query()], cart: Cart):
    return await cart.cart_items(query)


@router.post("/cart")
async def update_cart(body: AddToCartRequest, cart: Cart):
    return await cart.update_cart(body)


@router.get("/farmer-address")
async def farmer_address(query: Annotated[FarmerAddressQuery, Query()], cart: Cart):
    return await cart.farmer_address(query)


@router.get("/active-coupons")
async def active_coupons(query: Annotated[ActiveCouponsQuery, Query()], cart: Cart):
    return await cart.active_coupons(query)


@router.get("/verify-coupon")
async def verify_coupon(query: Annotated[VerifyCouponQuery, Query()], cart: Cart):
    return await cart.verify_coupon(query)

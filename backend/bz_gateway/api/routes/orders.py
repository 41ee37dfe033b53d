"""Order Routes — checkout, payments, order tracking and farmer profile.

Invariants:
    - Responses are the upstream body unchanged
    - Open bodies must be JSON objects; anything else is a 400
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query

from bz_gateway.api.dependencies import get_order_service
from bz_gateway.core.domain_types import LocationLevel
from bz_gateway.services.order_service import OrderService

router = APIRouter(prefix="/api/products", tags=["orders"])

Orders = Annotated[OrderService, Depends(get_order_service)]
OpenBody = Annotated[dict[str, Any], Body()]


@router.post("/create-order")
async def create_order(body: OpenBody, orders: Orders):
    return await orders.create_order(body)


@router.post("/map-partner-order")
async def map_partner_order(body: OpenBody, orders: Orders):
    return await orders.map_partner_order(body)


@router.post("/accept-payment")
async def accept_payment(body: OpenBody, orders: Orders):
    return await orders.accept_payment(body)


@router.post("/complete-payment")
async def complete_payment(body: OpenBody, orders: Orders):
    return await orders.complete_payment(body)


@router.get("/update-order-status")
async def update_order_status(
    orders: Orders,
    all_order_ids: str = Query(alias="AllOrderids", min_length=1),
    payment_status: str = Query(alias="PaymentStatus", min_length=1),
):
    return await orders.update_order_status(all_order_ids, payment_status)


@router.get("/order-history")
async def order_history(orders: Orders, farmer_id: str = Query(alias="Farmerid", min_length=1)):
    return await orders.order_history(farmer_id)


@router.get("/product-cancel-status")
async def product_cancel_status(orders: Orders, type_id: str = Query(alias="typeid")):
    return await orders.product_cancel_status(type_id)


@router.get("/order-status")
async def order_status(
    orders: Orders,
    record_id: str = Query(alias="recordid"),
    order_id: str = Query(alias="orderid"),
):
    return await orders.order_status(record_id, order_id)


@router.post("/cancel-order")
async def cancel_order(body: OpenBody, orders: Orders):
    return await orders.cancel_order(body)


@router.post("/update-farmer-data")
async def update_farmer_data(body: OpenBody, orders: Orders):
    return await orders.update_farmer_data(body)


@router.get("/state-district-block-village")
async def state_district_block_village(
    orders: Orders,
    api_key: str = Query(alias="apiKey"),
    level: LocationLevel = Query(alias="type"),
    location_id: int | None = Query(None, alias="Id"),
    location_id_lower: int | None = Query(None, alias="id"),
):
    """Id and id are both accepted; the upstream only understands lowercase id."""
    resolved = location_id if location_id is not None else location_id_lower
    return await orders.location_lookup(api_key, resolved or 0, level.value)

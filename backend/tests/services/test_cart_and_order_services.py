"""Tests: CartService and OrderService — cart mutations, coupons, checkout pass-through."""

import pytest

from bz_gateway.core import upstream_urls as urls
from bz_gateway.core.errors import ExternalAPIError
from bz_gateway.schemas.cart import (
    ActiveCouponsQuery, AddToCartRequest, CartItemsQuery, FarmerAddressQuery, VerifyCouponQuery,
)
from bz_gateway.services.cart_service import CartService
from bz_gateway.services.order_service import OrderService

from tests.fake_upstream import body_of


@pytest.fixture
def cart(http_client):
    return CartService(http_client)


@pytest.fixture
def orders(http_client):
    return OrderService(http_client)


# ─── Cart ────────────────────────────────────────────────────────

async def test_add_to_cart_forwards_quantity(cart, upstream):
    upstream.on(urls.ADD_TO_CART_URL, (200, {"Status": True}))

    result = await cart.update_cart(
        AddToCartRequest(InType="Add", MobileNo=9876543210, BzProductId=101, Quantity=2),
    )

    sent = body_of(upstream.last(urls.ADD_TO_CART_URL))
    assert sent == {"InType": "Add", "MobileNo": 9876543210, "BzProductId": 101, "Quantity": 2}
    assert result["requestData"] == sent


async def test_remove_from_cart_omits_quantity(cart, upstream):
    upstream.on(urls.ADD_TO_CART_URL, (200, {"Status": True}))

    await cart.update_cart(AddToCartRequest(InType="Remove", MobileNo=9876543210, BzProductId=101))

    assert "Quantity" not in body_of(upstream.last(urls.ADD_TO_CART_URL))


async def test_cart_failure_message_names_action(cart, upstream):
    upstream.on(urls.ADD_TO_CART_URL, (400, {"Message": "bad product"}))

    with pytest.raises(ExternalAPIError) as exc:
        await cart.update_cart(AddToCartRequest(InType="Remove", MobileNo=1, BzProductId=1))
    assert exc.value.message == "Failed to remove item to cart"


async def test_cart_items_echo_query(cart, upstream):
    upstream.on(urls.CART_ITEMS_URL, (200, {"CartItems": []}))

    result = await cart.cart_items(CartItemsQuery(MobileNo="9876543210"))

    assert result["queryParams"] == {"MobileNo": "9876543210"}


async def test_farmer_address_returns_raw_body(cart, upstream):
    upstream.on(urls.FARMER_ADDRESS_URL, (200, {"Address": [{"Pincode": "110001"}]}))

    result = await cart.farmer_address(FarmerAddressQuery(FarmerID="42"))

    assert result == {"Address": [{"Pincode": "110001"}]}
    assert "Version" not in upstream.last(urls.FARMER_ADDRESS_URL).url.params


async def test_coupons(cart, upstream):
    upstream.on(urls.ACTIVE_COUPONS_URL, (200, [{"CouponCode": "BZ10"}]))
    upstream.on(urls.COUPON_VALIDITY_URL, (200, {"IsValid": True}))

    active = await cart.active_coupons(ActiveCouponsQuery(PackageId="9"))
    verified = await cart.verify_coupon(VerifyCouponQuery(
        AgentId=1, PackageId=9, CouponCode="BZ10", quantity=1, TxnValue=2500,
    ))

    assert active["queryParams"] == {"PackageId": "9"}
    assert verified["data"] == {"IsValid": True}
    assert upstream.last(urls.COUPON_VALIDITY_URL).url.params["TxnValue"] == "2500"


# ─── Orders ──────────────────────────────────────────────────────

async def test_create_order_defaults_farmer_fields(orders, upstream):
    upstream.on(urls.CREATE_ORDER_URL, (200, {"OrderId": "BZ123"}))
    order = {"Farmer": {"Name": "Ramesh", "FatherName": None}, "Items": [{"BzProductId": 101}]}

    result = await orders.create_order(order)

    sent = body_of(upstream.last(urls.CREATE_ORDER_URL))
    assert sent["Farmer"] == {"Name": "Ramesh", "FatherName": "", "OtherVillageName": ""}
    assert sent["Items"] == [{"BzProductId": 101}]
    assert result == {"OrderId": "BZ123"}
    assert order["Farmer"]["FatherName"] is None


async def test_payments_pass_through(orders, upstream):
    upstream.on(urls.ACCEPT_PAYMENT_URL, (200, {"PaymentUrl": "https://pay"}))
    upstream.on(urls.COMPLETE_PAYMENT_URL, (200, {"Status": "Success"}))
    upstream.on(urls.MAP_PARTNER_ORDER_URL, (200, {"Mapped": True}))

    assert await orders.accept_payment({"Amount": 100}) == {"PaymentUrl": "https://pay"}
    assert await orders.complete_payment({"TxnId": "T1"}) == {"Status": "Success"}
    assert await orders.map_partner_order({"OrderId": "BZ123"}) == {"Mapped": True}


async def test_order_queries_use_upstream_param_names(orders, upstream):
    upstream.on(urls.ORDER_STATUS_URL, (200, {"Status": "Shipped"}))
    upstream.on(urls.UPDATE_ORDER_STATUS_URL, (200, {"Updated": True}))

    await orders.order_status("11", "BZ123")
    await orders.update_order_status("BZ1,BZ2", "Success")

    assert dict(upstream.last(urls.ORDER_STATUS_URL).url.params) == {"recordid": "11", "orderid": "BZ123"}
    assert upstream.last(urls.UPDATE_ORDER_STATUS_URL).url.params["AllOrderids"] == "BZ1,BZ2"


async def test_update_farmer_data_warns_without_mobile(orders, upstream, caplog):
    upstream.on(urls.UPDATE_FARMER_DATA_URL, (200, {"Status": True}))

    await orders.update_farmer_data({"Name": "Ramesh"})

    assert "without Mobile" in caplog.text


async def test_location_lookup_sends_lowercase_id(orders, upstream):
    upstream.on(urls.LOCATION_LOOKUP_URL, (200, [{"Id": 1, "Name": "Haryana"}]))

    await orders.location_lookup("key", 0, "S")

    params = dict(upstream.last(urls.LOCATION_LOOKUP_URL).url.params)
    assert params == {"apiKey": "key", "id": "0", "type": "S"}


async def test_order_failure_propagates_status(orders, upstream):
    upstream.on(urls.ORDER_HISTORY_URL, (500, {"Message": "boom"}))

    with pytest.raises(ExternalAPIError) as exc:
        await orders.order_history("42")

    assert exc.value.http_status == 500
    assert len(upstream.calls(urls.ORDER_HISTORY_URL)) == 3

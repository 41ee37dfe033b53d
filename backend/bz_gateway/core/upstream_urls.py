"""Upstream Endpoint Table — absolute URLs of the behtarzindagi.in legacy API.

Invariants:
    - Every outbound call in services/ uses a constant from this module
    - Path spelling mirrors the upstream exactly (including its typos, e.g. GetAllProductsByCatogory)
"""

BZ_ORIGIN = "https://behtarzindagi.in"

BZ_API_BASE = f"{BZ_ORIGIN}/BZFarmerApp_Live/api"
BZ_TRACTOR_BASE = f"{BZ_ORIGIN}/Tractor_Api_Test"
BZ_FARMER_APP_BASE = f"{BZ_ORIGIN}/bz_FarmerApp/ProductDetail.svc"


# ─── OTP login ───────────────────────────────────────────────────

OTP_SEND_URL = f"{BZ_TRACTOR_BASE}/api/Home/CentraliseLogin"
OTP_VERIFY_URL = f"{BZ_TRACTOR_BASE}/api/Home/CentraliseVerifyLogin"


# ─── Catalog ─────────────────────────────────────────────────────

ALL_PRODUCTS_URL = f"{BZ_API_BASE}/Home/GetAllProducts"
MAIN_CATEGORIES_URL = f"{BZ_API_BASE}/Category/Get_MainCategory"
SHORT_VIDEOS_URL = f"{BZ_API_BASE}/BzCommonApi/GetBzShortVideosURLs"
PRODUCT_DETAILS_URL = f"{BZ_API_BASE}/home/GetBZProductDetails"
RELATED_PRODUCTS_URL = f"{BZ_API_BASE}/Home/GetRelatedProducts"
PRICE_RANGE_URL = f"{BZ_API_BASE}/Livestock/GetProductsByPriceRange"
PRODUCTS_BY_CATEGORY_URL = f"{BZ_API_BASE}/Home/GetAllProductsByCatogory"
TOP_SELLING_URL = f"{BZ_API_BASE}/LiveStock/GetTopSellingProductsWeb"


# ─── Cart, address & coupons ─────────────────────────────────────

CART_ITEMS_URL = f"{BZ_API_BASE}/BzWebsite/GetCartItems"
ADD_TO_CART_URL = f"{BZ_API_BASE}/BzWebsite/AddToCartItems"
FARMER_ADDRESS_URL = f"{BZ_API_BASE}/Home/GetFarmerAddress"
ACTIVE_COUPONS_URL = f"{BZ_API_BASE}/Home/GetAllActiveCoupons"
COUPON_VALIDITY_URL = f"{BZ_API_BASE}/Home/GetCouponValidity"


# ─── Orders & payments ───────────────────────────────────────────

CREATE_ORDER_URL = f"{BZ_API_BASE}/LiveStock/OrderCreateWebAddToCart"
ORDER_HISTORY_URL = f"{BZ_API_BASE}/Home/Get_OrderHistory"
ORDER_STATUS_URL = f"{BZ_API_BASE}/Home/OrderStatus"
PRODUCT_CANCEL_STATUS_URL = f"{BZ_API_BASE}/Home/ProductCancelStatus"
CANCEL_ORDER_URL = f"{BZ_API_BASE}/Home/CancelReason"
UPDATE_ORDER_STATUS_URL = f"{BZ_API_BASE}/Home/UpdateOrderStatusAfterPaymentGetway"

MAP_PARTNER_ORDER_URL = f"{BZ_TRACTOR_BASE}/api/Partnership/ToMapPartnerOrderDetailsThirdPartyUserId"
ACCEPT_PAYMENT_URL = f"{BZ_TRACTOR_BASE}/api/Payments/ToAcceptCustomerPaymentRequest"
COMPLETE_PAYMENT_URL = f"{BZ_TRACTOR_BASE}/api/Payments/ToCompletePaymentRequest"


# ─── Farmer profile ──────────────────────────────────────────────

UPDATE_FARMER_DATA_URL = f"{BZ_FARMER_APP_BASE}/api/UpdateFarmerData"
LOCATION_LOOKUP_URL = f"{BZ_FARMER_APP_BASE}/api/GetStateDistrictBlockVilage"

"""Tests: Catalog routes — envelopes, validation and upstream error passthrough.

Invariants:
    - Invalid query/body is a 400 VALIDATION_ERROR envelope and never reaches the upstream
    - An upstream failure answers with the upstream status code and the storefront error envelope
"""

import httpx

from bz_gateway.core import upstream_urls as urls

from tests.fake_upstream import body_of


async def test_list_products_defaults(client, upstream):
    upstream.on(urls.ALL_PRODUCTS_URL, (200, {"Products": []}))

    response = await client.get("/api/products")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["pagination"] == {"pageIndex": 1, "pageSize": 10}
    assert body_of(upstream.last(urls.ALL_PRODUCTS_URL)) == {"PageIndex": 1, "PageSize": 10}


async def test_page_size_over_limit_is_rejected(client, upstream):
    response = await client.get("/api/products", params={"pageSize": 500})

    assert response.status_code == 400
    body = response.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["statusCode"] == 400
    assert body["message"] == "Invalid request data"
    assert any("pageSize" in e["field"] for e in body["errors"])
    assert upstream.requests == []


async def test_upstream_status_passes_through(client, upstream):
    upstream.on(urls.MAIN_CATEGORIES_URL, (404, {"Message": "not here"}))

    response = await client.get("/api/products/categories")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 404
    assert body["errorCode"] == "EXTERNAL_API_ERROR"
    assert body["message"] == "Failed to fetch categories"
    assert body["error"] == {"Message": "not here"}


async def test_network_failure_is_503(client, upstream):
    upstream.on(urls.MAIN_CATEGORIES_URL, httpx.ConnectError("refused"))

    response = await client.get("/api/products/categories")

    assert response.status_code == 503
    assert response.json()["errorCode"] == "NETWORK_ERROR"


async def test_by_category_accepts_numeric_id(client, upstream):
    upstream.on(urls.PRODUCTS_BY_CATEGORY_URL, (200, {"Products": []}))

    response = await client.post("/api/products/by-category", json={"CategoryId": 12})

    assert response.status_code == 200
    assert body_of(upstream.last(urls.PRODUCTS_BY_CATEGORY_URL))["CategoryId"] == "12"


async def test_details_requires_product_id(client, upstream):
    response = await client.post("/api/products/details", json={"DistrictId": 1, "slug": "x"})

    assert response.status_code == 400
    assert upstream.requests == []


async def test_videos_without_body(client, upstream):
    upstream.on(urls.SHORT_VIDEOS_URL, (200, {"Videos": []}))

    response = await client.post("/api/products/videos")

    assert response.status_code == 200
    assert response.json()["pagination"] == {"page": 1, "PageSize": 4, "HashTagId": 0}


async def test_search_by_price_null_bound(client, upstream):
    upstream.on(urls.PRICE_RANGE_URL, (200, {"Products": []}))

    response = await client.get(
        "/api/products/search-by-price",
        params={"SearchText": "tiller", "MinPrice": "100", "MaxPrice": "null"},
    )

    assert response.status_code == 200
    params = upstream.last(urls.PRICE_RANGE_URL).url.params
    assert params["MinPrice"] == "100"
    assert "MaxPrice" not in params


async def test_related_and_top_selling(client, upstream):
    upstream.on(urls.RELATED_PRODUCTS_URL, (200, []))
    upstream.on(urls.TOP_SELLING_URL, (200, []))

    related = await client.get("/api/products/related", params={"ProductName": "Sprayer"})
    top = await client.get("/api/products/top-selling", params={"Category": 2})

    assert related.json()["productInfo"] == {"ProductName": "Sprayer"}
    assert top.json()["queryParams"] == {"Category": 2}


async def test_by_category_page_size_over_limit_is_rejected(client, upstream):
    response = await client.post(
        "/api/products/by-category", json={"CategoryId": "7", "PageSize": 500},
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"
    assert upstream.requests == []


async def test_upstream_failure_log_names_upstream_url(client, upstream, caplog):
    upstream.on(urls.MAIN_CATEGORIES_URL, (404, {"Message": "not here"}))

    await client.get("/api/products/categories")

    records = [r for r in caplog.records if r.name == "bz_gateway.api.error_handlers"]
    assert records
    assert records[-1].url == urls.MAIN_CATEGORIES_URL
    assert records[-1].path == "/api/products/categories"

"""Catalog Service — product listing, details, search and videos proxied to the upstream.

Invariants:
    - Every method makes exactly one ResilientHttpClient call (retries happen inside the client)
    - Responses are success envelopes echoing the request parameters the storefront needs
    - Absent optional query parameters are not sent; a 0 price bound is sent

Design Decisions:
    - Payload field names are passed through untouched: the upstream is case-sensitive
    - ProductName is wrapped in single quotes because the upstream interpolates it into SQL-like filters
"""

import logging
from typing import Any

from bz_gateway.core import upstream_urls as urls
from bz_gateway.infrastructure.http_client import ResilientHttpClient
from bz_gateway.schemas.catalog import (
    PriceRangeQuery,
    ProductDetailsRequest,
    ProductListQuery,
    ProductsByCategoryRequest,
    RelatedProductsQuery,
    TopSellingQuery,
    VideosRequest,
)
from bz_gateway.services.upstream import ensure_success, envelope, plain_number

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, client: ResilientHttpClient):
        self.client = client

    async def list_products(self, query: ProductListQuery) -> dict[str, Any]:
        body = {"PageIndex": query.pageIndex, "PageSize": query.pageSize}
        result = await self.client.post(urls.ALL_PRODUCTS_URL, body)
        ensure_success(result, "Failed to fetch products", urls.ALL_PRODUCTS_URL)
        return envelope(
            result.data,
            pagination={"pageIndex": query.pageIndex, "pageSize": query.pageSize},
        )

    async def list_categories(self) -> dict[str, Any]:
        result = await self.client.get(urls.MAIN_CATEGORIES_URL)
        ensure_success(result, "Failed to fetch categories", urls.MAIN_CATEGORIES_URL)
        return envelope(result.data)

    async def products_by_category(self, request: ProductsByCategoryRequest) -> dict[str, Any]:
        body = request.model_dump()
        result = await self.client.post(urls.PRODUCTS_BY_CATEGORY_URL, body)
        ensure_success(
            result, "Failed to fetch products by category", urls.PRODUCTS_BY_CATEGORY_URL,
        )
        return envelope(
            result.data,
            pagination={
                "PageIndex": request.PageIndex,
                "PageSize": request.PageSize,
                "CategoryId": request.CategoryId,
            },
        )

    async def product_details(self, request: ProductDetailsRequest) -> dict[str, Any]:
        result = await self.client.post(urls.PRODUCT_DETAILS_URL, request.model_dump())
        ensure_success(result, "Failed to fetch product details", urls.PRODUCT_DETAILS_URL)
        return envelope(
            result.data,
            productInfo={
                "ProductId": request.ProductId,
                "DistrictId": request.DistrictId,
                "slug": request.slug,
            },
        )

    async def related_products(self, query: RelatedProductsQuery) -> dict[str, Any]:
        params = {"ProductName": f"'{query.ProductName}'"}
        result = await self.client.get(urls.RELATED_PRODUCTS_URL, params)
        ensure_success(result, "Failed to fetch related products", urls.RELATED_PRODUCTS_URL)
        return envelope(result.data, productInfo={"ProductName": query.ProductName})

    async def short_videos(self, request: VideosRequest) -> dict[str, Any]:
        result = await self.client.post(urls.SHORT_VIDEOS_URL, request.model_dump())
        ensure_success(result, "Failed to fetch videos", urls.SHORT_VIDEOS_URL)
        return envelope(
            result.data,
            pagination={
                "page": request.page,
                "PageSize": request.PageSize,
                "HashTagId": request.HashTagId,
            },
        )

    async def search_by_price(self, query: PriceRangeQuery) -> dict[str, Any]:
        params = {
            "SearchText": query.SearchText,
            "MinPrice": plain_number(query.MinPrice),
            "MaxPrice": plain_number(query.MaxPrice),
            "MobNo": query.MobNo or None,
            "DeviceId": query.DeviceId or None,
        }
        result = await self.client.get(urls.PRICE_RANGE_URL, params)
        ensure_success(
            result, "Failed to fetch products by price range", urls.PRICE_RANGE_URL,
        )
        return envelope(result.data, searchParams=query.model_dump())

    async def top_selling(self, query: TopSellingQuery) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if query.Category is not None:
            params["Category"] = query.Category
        result = await self.client.get(urls.TOP_SELLING_URL, params)
        ensure_success(result, "Failed to fetch top selling products", urls.TOP_SELLING_URL)
        return envelope(result.data, queryParams=params)

"""Catalog Routes — product listing, categories, details, search and videos.

Invariants:
    - Every handler delegates to CatalogService; no upstream URL appears here
    - Query DTOs are validated before the upstream is called (400 on bad input)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bz_gateway.api.dependencies import get_catalog_service
from bz_gateway.schemas.catalog import (
    PriceRangeQuery,
    ProductDetailsRequest,
    ProductListQuery,
    ProductsByCategoryRequest,
    RelatedProductsQuery,
    TopSellingQuery,
    VideosRequest,
)
from bz_gateway.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/products", tags=["catalog"])

Catalog = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get("")
async def list_products(query: Annotated[ProductListQuery, Query()], catalog: Catalog):
    return await catalog.list_products(query)


@router.get("/categories")
async def list_categories(catalog: Catalog):
    return await catalog.list_categories()


@router.post("/by-category")
async def products_by_category(body: ProductsByCategoryRequest, catalog: Catalog):
    return await catalog.products_by_category(body)


@router.post("/details")
async def product_details(body: ProductDetailsRequest, catalog: Catalog):
    return await catalog.product_details(body)


@router.get("/related")
async def related_products(
    query: Annotated[RelatedProductsQuery, Query()], catalog: Catalog,
):
    return await catalog.related_products(query)


@router.post("/videos")
async def short_videos(catalog: Catalog, body: VideosRequest | None = None):
    return await catalog.short_videos(body or VideosRequest())


@router.get("/search-by-price")
async def search_by_price(query: Annotated[PriceRangeQuery, Query()], catalog: Catalog):
    return await catalog.search_by_price(query)


@router.get("/top-selling")
async def top_selling(query: Annotated[TopSellingQuery, Query()], catalog: Catalog):
    return await catalog.top_selling(query)

"""Catalog Schemas — query and body models for the product catalog proxy routes.

Invariants:
    - Paging: index >= 1, size between 1 and 100; defaults 1 / 10
    - Price bounds: "null", "" or unparsable input means "no bound"; 0 is a real bound
    - ProductDetailsRequest fills the optional device fields with the upstream's neutral values

Design Decisions:
    - Field names mirror the upstream payload: the service forwards model_dump() unchanged
"""

from pydantic import BaseModel, Field, field_validator

DEFAULT_PAGE_INDEX = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ProductListQuery(BaseModel):
    pageIndex: int = Field(DEFAULT_PAGE_INDEX, ge=1)
    pageSize: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class ProductsByCategoryRequest(BaseModel):
    PageIndex: int = Field(DEFAULT_PAGE_INDEX, ge=1)
    PageSize: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    CategoryId: str = Field(min_length=1)

    @field_validator("CategoryId", mode="before")
    @classmethod
    def category_as_string(cls, v):
        """Storefront sends CategoryId as either number or string."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ProductDetailsRequest(BaseModel):
    ProductId: int
    DistrictId: int
    slug: str
    deviceId: str = ""
    gcmId: str = ""
    lat: str = "0.0"
    lon: str = "0.0"


class RelatedProductsQuery(BaseModel):
    ProductName: str = Field(min_length=1)


class VideosRequest(BaseModel):
    page: int = Field(1, ge=1)
    PageSize: int = Field(4, ge=1)
    HashTagId: int = Field(0, ge=0)


class PriceRangeQuery(BaseModel):
    SearchText: str | None = None
    MinPrice: float | None = Field(None, ge=0)
    MaxPrice: float | None = Field(None, ge=0)
    MobNo: str | None = None
    DeviceId: str | None = None

    @field_validator("MinPrice", "MaxPrice", mode="before")
    @classmethod
    def parse_price(cls, v):
        if v is None or v == "" or v == "null":
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None


class TopSellingQuery(BaseModel):
    Category: int | None = Field(None, gt=0)

"""Cart & Coupon Schemas — request models for the cart, address and coupon proxy routes."""

from typing import Literal

from pydantic import BaseModel, Field


class CartItemsQuery(BaseModel):
    MobileNo: str = Field(min_length=1)


class AddToCartRequest(BaseModel):
    InType: Literal["Add", "Remove"]
    MobileNo: int
    BzProductId: int
    Quantity: int | None = Field(None, ge=1)


class FarmerAddressQuery(BaseModel):
    FarmerID: str = Field(min_length=1)
    Version: str | None = None


class ActiveCouponsQuery(BaseModel):
    PackageId: str = Field(min_length=1)


class VerifyCouponQuery(BaseModel):
    AgentId: int = Field(gt=0)
    PackageId: int = Field(gt=0)
    CouponCode: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    TxnValue: int = Field(gt=0)

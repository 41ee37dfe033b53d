"""Website User Schemas — CRUD, login and OTP payloads for /api/website-users.

Invariants:
    - WebsiteUserResponse never exposes password
    - OTP number: Indian mobile, 10 digits starting 6-9; OTP: exactly 5 digits
    - Names in OTP requests are letters and spaces only

Design Decisions:
    - snake_case attributes with camelCase aliases: the storefront speaks camelCase, Python code does not
    - Email validated by pattern, not EmailStr: avoids an extra dependency for a loose check
"""

from datetime import date, datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
INDIAN_MOBILE_PATTERN = r"^[6-9]\d{9}$"
OTP_PATTERN = r"^\d{5}$"
NAME_PATTERN = r"^[A-Za-z\s]+$"
# bcrypt hashes at most 72 bytes of input.
MAX_PASSWORD_BYTES = 72

Gender = Literal["male", "female", "other"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_password_bytes(v: str | None) -> str | None:
    if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
    return v


class WebsiteUserCreate(_CamelModel):
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    first_name: str = Field(min_length=2, max_length=100)
    last_name: str = Field(min_length=2, max_length=100)
    phone: str | None = Field(None, min_length=10, max_length=15)
    password: str | None = Field(None, min_length=6, max_length=72)
    profile_image: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=10)
    country: str | None = Field(None, max_length=100)
    is_email_verified: bool = False
    is_phone_verified: bool = False
    is_active: bool = True
    role: str = Field("user", max_length=50)
    preferences: dict[str, Any] | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_bytes(v)


class WebsiteUserUpdate(_CamelModel):
    """Partial update: only fields present in the request are applied."""
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    first_name: str | None = Field(None, min_length=2, max_length=100)
    last_name: str | None = Field(None, min_length=2, max_length=100)
    phone: str | None = Field(None, min_length=10, max_length=15)
    password: str | None = Field(None, min_length=6, max_length=72)
    profile_image: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=10)
    country: str | None = Field(None, max_length=100)
    is_email_verified: bool | None = None
    is_phone_verified: bool | None = None
    is_active: bool | None = None
    role: str | None = Field(None, max_length=50)
    preferences: dict[str, Any] | None = None

    @field_validator(
        "email", "first_name", "last_name", "is_email_verified",
        "is_phone_verified", "is_active", "role", mode="before",
    )
    @classmethod
    def reject_null(cls, v):
        """Omit a field to leave it unchanged; these columns cannot be cleared."""
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_bytes(v)


class WebsiteUserResponse(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    profile_image: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    country: str | None = None
    is_email_verified: bool
    is_phone_verified: bool
    is_active: bool
    last_login_at: datetime | None = None
    preferences: dict[str, Any] | None = None
    role: str
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class SendOtpRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100, pattern=NAME_PATTERN)
    number: str = Field(pattern=INDIAN_MOBILE_PATTERN)


class VerifyOtpRequest(SendOtpRequest):
    otp: str = Field(pattern=OTP_PATTERN)


class UserListQuery(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


class UserSearchQuery(UserListQuery):
    q: str = Field(min_length=1)

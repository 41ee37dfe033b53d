"""WebsiteUser ORM — storefront accounts, created by admin CRUD or on first OTP login.

Invariants:
    - email is unique and required; phone is unique when present
    - password is never serialized (schemas/website_user.py excludes it)
    - isActive defaults to true; role defaults to "user"

Design Decisions:
    - OTP-only users get a synthetic "<phone>@phone.local" email so the unique email column stays NOT NULL
    - preferences as JSON: free-form storefront settings, no schema imposed
"""

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, JSON, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from bz_gateway.db.base import Base, TimestampMixin


class WebsiteUser(TimestampMixin, Base):
    __tablename__ = "website_users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column("firstName", String(100), nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(15), unique=True, nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image: Mapped[str | None] = mapped_column("profileImage", Text, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column("dateOfBirth", Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_email_verified: Mapped[bool] = mapped_column(
        "isEmailVerified", Boolean, nullable=False, default=False,
    )
    is_phone_verified: Mapped[bool] = mapped_column(
        "isPhoneVerified", Boolean, nullable=False, default=False,
    )
    is_active: Mapped[bool] = mapped_column(
        "isActive", Boolean, nullable=False, default=True,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        "lastLoginAt", DateTime(timezone=True), nullable=True,
    )
    last_login_ip: Mapped[str | None] = mapped_column("lastLoginIp", String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column("userAgent", Text, nullable=True)
    preferences: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="user")

"""WebsiteTraffic ORM — one row per storefront visit, attributed to a UTM source."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from bz_gateway.db.base import Base, TimestampMixin, utc_now

DEFAULT_UTM_SOURCE = "organic"


class WebsiteTraffic(TimestampMixin, Base):
    __tablename__ = "website_traffic"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_uuid: Mapped[uuid.UUID | None] = mapped_column(
        "userUuid", UUID(as_uuid=True), nullable=True,
    )
    utm_source: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_UTM_SOURCE,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

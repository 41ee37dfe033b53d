"""EventTracking ORM — storefront click events.

Invariants:
    - pageUrl and buttonClicked are required; user identity is optional (anonymous visitors)
    - timestamp is when the event happened client-side, createdAt when it was stored
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from bz_gateway.db.base import Base, TimestampMixin, utc_now


class EventTracking(TimestampMixin, Base):
    __tablename__ = "event_tracking"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_uuid: Mapped[uuid.UUID | None] = mapped_column(
        "userUuid", UUID(as_uuid=True), nullable=True,
    )
    phone_number: Mapped[str | None] = mapped_column("phoneNumber", String(20), nullable=True)
    page_url: Mapped[str] = mapped_column("pageUrl", Text, nullable=False)
    button_clicked: Mapped[str] = mapped_column("buttonClicked", String(255), nullable=False)
    event: Mapped[str | None] = mapped_column(String(255), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

"""FooterIcon ORM — bottom navigation entries of the mobile storefront."""

import uuid

from sqlalchemy import Boolean, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from bz_gateway.db.base import Base, TimestampMixin


class FooterIcon(TimestampMixin, Base):
    __tablename__ = "footer_icons"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Emoji glyph, e.g. "🏠"
    icon: Mapped[str] = mapped_column(String(10), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        "isActive", Boolean, nullable=False, default=True,
    )

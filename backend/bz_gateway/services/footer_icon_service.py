"""Footer Icon Service — CRUD for the storefront bottom navigation plus the default seed.

Invariants:
    - Listing is ordered by createdAt ascending (navigation order = insertion order)
    - seed_defaults() inserts only into an empty table; it is safe to run on every startup
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bz_gateway.core.domain_types import ErrorCode
from bz_gateway.core.errors import ResourceNotFoundError
from bz_gateway.models.footer_icon import FooterIcon
from bz_gateway.schemas.footer_icon import FooterIconCreate, FooterIconUpdate

logger = logging.getLogger(__name__)

DEFAULT_FOOTER_ICONS = (
    ("Home", "🏠"),
    ("Categories", "🗂️"),
    ("Videos", "🎬"),
    ("Community", "👥"),
)


class FooterIconService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_icons(self, is_active: bool | None = None) -> list[FooterIcon]:
        query = select(FooterIcon).order_by(FooterIcon.created_at.asc())
        if is_active is not None:
            query = query.where(FooterIcon.is_active.is_(is_active))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_icon(self, icon_id: UUID) -> FooterIcon:
        icon = await self.db.get(FooterIcon, icon_id)
        if not icon:
            raise ResourceNotFoundError(
                "Footer icon", str(icon_id), ErrorCode.FOOTER_ICON_NOT_FOUND,
            )
        return icon

    async def create_icon(self, data: FooterIconCreate) -> FooterIcon:
        icon = FooterIcon(**data.model_dump())
        self.db.add(icon)
        await self.db.commit()
        await self.db.refresh(icon)
        return icon

    async def update_icon(self, icon_id: UUID, data: FooterIconUpdate) -> FooterIcon:
        icon = await self.get_icon(icon_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(icon, key, value)
        await self.db.commit()
        await self.db.refresh(icon)
        return icon

    async def delete_icon(self, icon_id: UUID) -> None:
        icon = await self.get_icon(icon_id)
        await self.db.delete(icon)
        await self.db.commit()

    async def seed_defaults(self) -> int:
        """Insert the default icons when the table is empty. Returns rows inserted."""
        existing = (await self.db.execute(
            select(func.count()).select_from(FooterIcon),
        )).scalar_one()
        if existing:
            return 0
        for name, glyph in DEFAULT_FOOTER_ICONS:
            # One flush per row: createdAt order must follow the seed order.
            self.db.add(FooterIcon(name=name, icon=glyph, is_active=True))
            await self.db.flush()
        await self.db.commit()
        logger.info(f"Seeded {len(DEFAULT_FOOTER_ICONS)} default footer icons")
        return len(DEFAULT_FOOTER_ICONS)

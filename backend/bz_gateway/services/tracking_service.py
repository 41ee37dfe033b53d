"""Tracking Service — write and list website-traffic visits and click events.

Invariants:
    - Omitted timestamps default to insert time; omitted utm_source defaults to "organic"
    - Listings are newest first (by timestamp)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bz_gateway.models.event_tracking import EventTracking
from bz_gateway.models.website_traffic import DEFAULT_UTM_SOURCE, WebsiteTraffic
from bz_gateway.schemas.tracking import EventTrackingCreate, WebsiteTrafficCreate

logger = logging.getLogger(__name__)


class WebsiteTrafficService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_visit(self, data: WebsiteTrafficCreate) -> WebsiteTraffic:
        visit = WebsiteTraffic(
            user_uuid=data.user_uuid,
            utm_source=data.utm_source or DEFAULT_UTM_SOURCE,
        )
        if data.timestamp is not None:
            visit.timestamp = data.timestamp
        self.db.add(visit)
        await self.db.commit()
        await self.db.refresh(visit)
        return visit

    async def list_visits(self) -> list[WebsiteTraffic]:
        result = await self.db.execute(
            select(WebsiteTraffic).order_by(WebsiteTraffic.timestamp.desc()),
        )
        return list(result.scalars().all())


class EventTrackingService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_event(self, data: EventTrackingCreate) -> EventTracking:
        values = data.model_dump(exclude={"timestamp"})
        event = EventTracking(**values)
        if data.timestamp is not None:
            event.timestamp = data.timestamp
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)
        logger.info(f"Tracked click on {event.button_clicked!r}")
        return event

    async def list_events(self) -> list[EventTracking]:
        result = await self.db.execute(
            select(EventTracking).order_by(EventTracking.timestamp.desc()),
        )
        return list(result.scalars().all())

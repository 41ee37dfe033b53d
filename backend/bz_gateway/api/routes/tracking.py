"""Tracking Routes — website-traffic visits and click events."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from bz_gateway.api.dependencies import get_event_service, get_traffic_service
from bz_gateway.schemas.tracking import (
    EventTrackingCreate,
    EventTrackingResponse,
    WebsiteTrafficCreate,
    WebsiteTrafficResponse,
)
from bz_gateway.services.tracking_service import (
    EventTrackingService, WebsiteTrafficService,
)
from bz_gateway.services.upstream import envelope

traffic_router = APIRouter(prefix="/api/website-traffic", tags=["tracking"])
events_router = APIRouter(prefix="/api/event-tracking", tags=["tracking"])

Traffic = Annotated[WebsiteTrafficService, Depends(get_traffic_service)]
Events = Annotated[EventTrackingService, Depends(get_event_service)]


def _dump(model, row) -> dict:
    return model.model_validate(row).model_dump(mode="json", by_alias=True)


@traffic_router.post("", status_code=status.HTTP_201_CREATED)
async def record_visit(body: WebsiteTrafficCreate, traffic: Traffic):
    visit = await traffic.record_visit(body)
    return envelope(_dump(WebsiteTrafficResponse, visit), "Website traffic recorded")


@traffic_router.get("")
async def list_visits(traffic: Traffic):
    visits = await traffic.list_visits()
    return envelope([_dump(WebsiteTrafficResponse, v) for v in visits], count=len(visits))


@events_router.post("", status_code=status.HTTP_201_CREATED)
async def record_event(body: EventTrackingCreate, events: Events):
    event = await events.record_event(body)
    return envelope(_dump(EventTrackingResponse, event), "Event tracked")


@events_router.get("")
async def list_events(events: Events):
    found = await events.list_events()
    return envelope([_dump(EventTrackingResponse, e) for e in found], count=len(found))

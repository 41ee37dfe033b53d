"""Footer Icon Routes — CRUD for the storefront bottom navigation."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from bz_gateway.api.dependencies import get_footer_icon_service
from bz_gateway.schemas.footer_icon import (
    FooterIconCreate, FooterIconResponse, FooterIconUpdate,
)
from bz_gateway.services.footer_icon_service import FooterIconService
from bz_gateway.services.upstream import envelope

router = APIRouter(prefix="/api/footer-icons", tags=["footer-icons"])

Icons = Annotated[FooterIconService, Depends(get_footer_icon_service)]


def _serialize(icon) -> dict:
    return FooterIconResponse.model_validate(icon).model_dump(mode="json", by_alias=True)


@router.get("")
async def list_icons(icons: Icons, is_active: bool | None = Query(None, alias="isActive")):
    found = await icons.list_icons(is_active)
    return envelope([_serialize(i) for i in found], count=len(found))


@router.get("/{icon_id}")
async def get_icon(icon_id: UUID, icons: Icons):
    return envelope(_serialize(await icons.get_icon(icon_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_icon(body: FooterIconCreate, icons: Icons):
    icon = await icons.create_icon(body)
    return envelope(_serialize(icon), "Footer icon created successfully")


@router.put("/{icon_id}")
async def update_icon(icon_id: UUID, body: FooterIconUpdate, icons: Icons):
    icon = await icons.update_icon(icon_id, body)
    return envelope(_serialize(icon), "Footer icon updated successfully")


@router.delete("/{icon_id}")
async def delete_icon(icon_id: UUID, icons: Icons):
    await icons.delete_icon(icon_id)
    return envelope(None, "Footer icon deleted successfully")

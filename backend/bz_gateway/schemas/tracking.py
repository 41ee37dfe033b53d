"""Tracking Schemas — website traffic and click events.

Invariants:
    - Traffic utm_source keeps its snake_case wire name (it is a UTM parameter, not a camelCase field)
    - Omitted timestamps are filled by the ORM default at insert time
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WebsiteTrafficCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_uuid: UUID | None = Field(None, alias="userUuid")
    utm_source: str | None = Field(None, max_length=255)
    timestamp: datetime | None = None


class WebsiteTrafficResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    user_uuid: UUID | None = Field(None, alias="userUuid")
    utm_source: str
    timestamp: datetime
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class EventTrackingCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_uuid: UUID | None = None
    phone_number: str | None = Field(None, max_length=20)
    page_url: str = Field(min_length=1)
    button_clicked: str = Field(min_length=1, max_length=255)
    event: str | None = Field(None, max_length=255)
    timestamp: datetime | None = None


class EventTrackingResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    user_uuid: UUID | None = None
    phone_number: str | None = None
    page_url: str
    button_clicked: str
    event: str | None = None
    timestamp: datetime
    created_at: datetime
    updated_at: datetime

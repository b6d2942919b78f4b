from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class YogaClassCreate(BaseModel):
    # Mux asset id, playback id and status are owned by the webhook; clients cannot set them.
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=150)
    description: str | None = Field(default=None, max_length=5000)
    duration_min: int = Field(default=0, ge=0)
    mux_upload_id: str | None = Field(default=None, max_length=255)
    thumbnail_url: str | None = None
    difficulty: str | None = Field(default=None, max_length=20)
    intensity: str | None = Field(default=None, max_length=20)
    style: str | None = Field(default=None, max_length=50)


class YogaClassPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID
    teacher_id: UUID
    title: str
    description: str | None
    duration_min: int
    video_type: str | None
    thumbnail_url: str | None
    difficulty: str | None
    intensity: str | None
    style: str | None

    mux_upload_id: str | None
    mux_asset_id: str | None
    mux_playback_id: str | None
    mux_status: str | None

    created_at: datetime
    updated_at: datetime

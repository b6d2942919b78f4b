from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateUploadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cors_origin: str | None = Field(default=None, max_length=2048, validation_alias="corsOrigin")


class CreateUploadResponse(BaseModel):
    uploadId: str
    uploadUrl: str


class UploadStatusResponse(BaseModel):
    id: str
    status: str
    assetId: str | None = None
    playbackId: str | None = None
    error: dict[str, Any] | None = None


class PlaybackIdPublic(BaseModel):
    id: str
    policy: str | None = None


class AssetResponse(BaseModel):
    id: str
    status: str
    duration: float | None = None
    aspectRatio: str | None = None
    playbackIds: list[PlaybackIdPublic]
    thumbnailUrl: str | None = None
    streamingUrl: str | None = None


class DeleteAssetResponse(BaseModel):
    success: bool = True


class WebhookAck(BaseModel):
    received: bool = True

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from yogaflow.api.deps import get_video_service, require_teacher, require_user
from yogaflow.core.errors import AppError, ValidationError
from yogaflow.db.models.user import User
from yogaflow.mux.client import VideoService
from yogaflow.schemas.mux import (
    AssetResponse,
    CreateUploadRequest,
    CreateUploadResponse,
    DeleteAssetResponse,
    PlaybackIdPublic,
    UploadStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mux", tags=["mux"])

UPLOAD_STATUS_ASSET_CREATED = "asset_created"


def _required_param(value: str | None, label: str) -> str:
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"{label} is required")
    return v


@router.post("/upload", response_model=CreateUploadResponse)
async def create_upload(
    body: CreateUploadRequest | None = None,
    current_user: User = Depends(require_teacher),
    video: VideoService = Depends(get_video_service),
) -> CreateUploadResponse:
    cors_origin = body.cors_origin if body is not None else None
    upload = await video.create_direct_upload(cors_origin=cors_origin)
    logger.info("Mux upload %s created for teacher %s", upload.upload_id, current_user.id)
    return CreateUploadResponse(uploadId=upload.upload_id, uploadUrl=upload.upload_url)


@router.get("/upload", response_model=UploadStatusResponse)
async def get_upload_status(
    uploadId: str | None = None,
    current_user: User = Depends(require_teacher),
    video: VideoService = Depends(get_video_service),
) -> UploadStatusResponse:
    upload_id = _required_param(uploadId, "Upload ID")
    upload = await video.get_upload(upload_id)

    playback_id = None
    if upload.status == UPLOAD_STATUS_ASSET_CREATED and upload.asset_id:
        try:
            asset = await video.get_asset(upload.asset_id)
            playback_id = asset.first_playback_id
        except AppError as e:
            # The upload itself resolved; a missing playback id is not fatal here.
            logger.warning("Could not load asset %s for upload %s: %s", upload.asset_id, upload_id, e.message)

    return UploadStatusResponse(
        id=upload.id,
        status=upload.status,
        assetId=upload.asset_id,
        playbackId=playback_id,
        error=upload.error,
    )


@router.get("/asset", response_model=AssetResponse)
async def get_asset(
    assetId: str | None = None,
    current_user: User = Depends(require_user),
    video: VideoService = Depends(get_video_service),
) -> AssetResponse:
    asset_id = _required_param(assetId, "Asset ID")
    asset = await video.get_asset(asset_id)

    first = asset.first_playback_id
    return AssetResponse(
        id=asset.id,
        status=asset.status,
        duration=asset.duration,
        aspectRatio=asset.aspect_ratio,
        playbackIds=[PlaybackIdPublic(id=p.id, policy=p.policy) for p in asset.playback_ids],
        thumbnailUrl=video.get_thumbnail_url(first) if first else None,
        streamingUrl=video.get_streaming_url(first) if first else None,
    )


@router.delete("/asset", response_model=DeleteAssetResponse)
async def delete_asset(
    assetId: str | None = None,
    current_user: User = Depends(require_teacher),
    video: VideoService = Depends(get_video_service),
) -> DeleteAssetResponse:
    """Delete the asset at Mux. Class rows that reference it are left alone."""
    asset_id = _required_param(assetId, "Asset ID")
    await video.delete_asset(asset_id)
    logger.info("Mux asset %s deleted by %s", asset_id, current_user.id)
    return DeleteAssetResponse(success=True)

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from yogaflow.api.deps import get_asset_store, get_video_service
from yogaflow.core.errors import SignatureError
from yogaflow.mux.client import VideoService
from yogaflow.mux.signature import SIGNATURE_HEADER
from yogaflow.mux.store import AssetReferenceStore
from yogaflow.mux.webhooks import MuxWebhookEvent, dispatch_event
from yogaflow.schemas.mux import WebhookAck

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks/mux", tags=["webhooks"])


@router.post("", response_model=WebhookAck)
async def mux_webhook(
    request: Request,
    video: VideoService = Depends(get_video_service),
    store: AssetReferenceStore = Depends(get_asset_store),
):
    """
    Mux webhook receiver.

    - Verify the signature over the raw body before trusting any field (401, no writes).
    - Parse the ``{type, data}`` envelope (500 if unparseable).
    - Dispatch to the matching handler; per-event failures are logged, never surfaced.
    - Acknowledge with ``{"received": true}``.
    """
    raw_body = await request.body()

    try:
        video.verify_webhook_signature(raw_body, request.headers.get(SIGNATURE_HEADER))
    except SignatureError as e:
        logger.warning("Rejected Mux webhook: %s", e.message)
        return JSONResponse({"error": "Invalid signature"}, status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        event = MuxWebhookEvent.model_validate_json(raw_body)
    except PydanticValidationError as e:
        logger.error("Error processing Mux webhook: %s", e)
        return JSONResponse({"error": "Webhook processing failed"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("Mux webhook received: %s", event.type)
    await dispatch_event(store, event)
    return WebhookAck(received=True)

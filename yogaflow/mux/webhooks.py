from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from yogaflow.mux.store import AssetReferenceStore

logger = logging.getLogger(__name__)

EVENT_ASSET_READY = "video.asset.ready"
EVENT_ASSET_ERRORED = "video.asset.errored"
EVENT_UPLOAD_ASSET_CREATED = "video.upload.asset_created"
EVENT_UPLOAD_ERRORED = "video.upload.errored"


class MuxWebhookEvent(BaseModel):
    # Mux sends many more envelope keys (object, environment, created_at, ...).
    model_config = ConfigDict(extra="ignore")

    type: str = Field(min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _data_as_object(cls, v):
        # A null or non-object data reaches the handlers as a payload with no match key.
        return v if isinstance(v, dict) else {}


def duration_to_minutes(seconds: Any) -> int | None:
    """Whole minutes, rounding halves up (642s -> 11, 90s -> 2)."""
    if seconds is None or isinstance(seconds, bool):
        return None
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(math.floor(value / 60 + 0.5))


def _first_playback_id(data: dict[str, Any]) -> str | None:
    for item in data.get("playback_ids") or []:
        if isinstance(item, dict) and item.get("id"):
            return str(item["id"])
    return None


def _require(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"webhook payload missing data.{key}")
    return value.strip()


async def handle_asset_ready(store: AssetReferenceStore, data: dict[str, Any]) -> int:
    asset_id = _require(data, "id")
    return await store.mark_asset_ready(
        asset_id,
        playback_id=_first_playback_id(data),
        duration_min=duration_to_minutes(data.get("duration")),
    )


async def handle_asset_errored(store: AssetReferenceStore, data: dict[str, Any]) -> int:
    asset_id = _require(data, "id")
    logger.warning("Mux asset %s errored: %s", asset_id, data.get("errors"))
    return await store.mark_asset_errored(asset_id)


async def handle_upload_asset_created(store: AssetReferenceStore, data: dict[str, Any]) -> int:
    upload_id = _require(data, "id")
    asset_id = _require(data, "asset_id")
    return await store.mark_asset_created(upload_id, asset_id)


async def handle_upload_errored(store: AssetReferenceStore, data: dict[str, Any]) -> int:
    upload_id = _require(data, "id")
    logger.warning("Mux upload %s errored: %s", upload_id, data.get("error"))
    return await store.mark_upload_errored(upload_id)


Handler = Callable[[AssetReferenceStore, dict[str, Any]], Awaitable[int]]

HANDLERS: dict[str, Handler] = {
    EVENT_ASSET_READY: handle_asset_ready,
    EVENT_ASSET_ERRORED: handle_asset_errored,
    EVENT_UPLOAD_ASSET_CREATED: handle_upload_asset_created,
    EVENT_UPLOAD_ERRORED: handle_upload_errored,
}


async def dispatch_event(store: AssetReferenceStore, event: MuxWebhookEvent) -> bool:
    """
    Apply one webhook event to the store.

    Returns True when the event type has a handler. Handler failures are
    logged and swallowed; the delivery is still acknowledged.
    """
    handler = HANDLERS.get(event.type)
    if handler is None:
        logger.info("Unhandled Mux webhook event: %s", event.type)
        return False

    try:
        matched = await handler(store, event.data)
    except Exception:
        logger.exception("Error handling Mux webhook event %s (data.id=%s)", event.type, event.data.get("id"))
        return True

    if matched:
        logger.info("Mux %s applied to %d class row(s) (data.id=%s)", event.type, matched, event.data.get("id"))
    else:
        # Asset may belong to another environment or the class was deleted.
        logger.info("Mux %s matched no class rows (data.id=%s)", event.type, event.data.get("id"))
    return True

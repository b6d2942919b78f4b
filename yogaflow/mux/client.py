from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from yogaflow.core.errors import NotFoundError, ServiceNotConfiguredError, UpstreamError
from yogaflow.core.settings import Settings
from yogaflow.mux import urls
from yogaflow.mux.signature import DEFAULT_TOLERANCE_SECONDS, verify_signature
from yogaflow.mux.types import AssetInfo, DirectUpload, PlaybackId, UploadInfo

logger = logging.getLogger(__name__)


class VideoService(Protocol):
    """Capabilities the API needs from the external video platform."""

    async def create_direct_upload(self, *, cors_origin: str | None = None) -> DirectUpload: ...

    async def get_upload(self, upload_id: str) -> UploadInfo: ...

    async def get_asset(self, asset_id: str) -> AssetInfo: ...

    async def delete_asset(self, asset_id: str) -> None: ...

    def verify_webhook_signature(self, raw_body: bytes, header: str | None) -> None: ...

    def get_thumbnail_url(self, playback_id: str, **options: Any) -> str: ...

    def get_streaming_url(self, playback_id: str) -> str: ...


@dataclass(frozen=True)
class MuxConfig:
    token_id: str | None
    token_secret: str | None
    webhook_secret: str | None
    default_cors_origin: str
    test_mode: bool
    api_base_url: str = "https://api.mux.com"
    webhook_tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS
    timeout_seconds: float = 15.0

    # Asset settings applied to every direct upload.
    playback_policy: tuple[str, ...] = ("public",)
    encoding_tier: str = "baseline"
    max_resolution_tier: str = "1080p"

    @classmethod
    def from_settings(cls, settings: Settings) -> "MuxConfig":
        test_mode = settings.mux_test_mode
        if test_mode is None:
            test_mode = not settings.is_production
        return cls(
            token_id=(settings.mux_token_id or "").strip() or None,
            token_secret=(settings.mux_token_secret or "").strip() or None,
            webhook_secret=(settings.mux_webhook_secret or "").strip() or None,
            default_cors_origin=settings.site_url,
            test_mode=bool(test_mode),
            api_base_url=settings.mux_api_base_url.rstrip("/"),
            webhook_tolerance_seconds=int(settings.mux_webhook_tolerance_seconds),
            timeout_seconds=float(settings.mux_http_timeout_seconds),
        )


def _parse_asset(data: dict[str, Any]) -> AssetInfo:
    playback_ids = [
        PlaybackId(id=str(p["id"]), policy=p.get("policy"))
        for p in (data.get("playback_ids") or [])
        if isinstance(p, dict) and p.get("id")
    ]
    return AssetInfo(
        id=str(data["id"]),
        status=str(data.get("status") or ""),
        duration=data.get("duration"),
        aspect_ratio=data.get("aspect_ratio"),
        playback_ids=playback_ids,
    )


class MuxClient:
    """
    Mux Video REST adapter (https://docs.mux.com/api-reference).

    Each call opens a short-lived ``httpx.AsyncClient``; failures surface
    immediately as ``UpstreamError`` and are never retried here.
    """

    def __init__(self, config: MuxConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport

    def _auth(self) -> tuple[str, str]:
        if not (self.config.token_id and self.config.token_secret):
            logger.error("Mux credentials not configured (missing MUX_TOKEN_ID / MUX_TOKEN_SECRET)")
            raise ServiceNotConfiguredError()
        return self.config.token_id, self.config.token_secret

    async def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> dict[str, Any]:
        auth = self._auth()
        url = f"{self.config.api_base_url}/video/v1{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                auth=auth,
                transport=self._transport,
            ) as client:
                res = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error("Mux %s %s transport error: %s", method, path, e)
            raise UpstreamError() from e

        if res.status_code == 404:
            raise NotFoundError("Video asset not found" if path.startswith("/assets") else "Upload not found")
        if res.status_code >= 400:
            logger.error("Mux %s %s returned %s: %s", method, path, res.status_code, res.text[:500])
            raise UpstreamError()
        if res.status_code == 204 or not res.content:
            return {}

        try:
            body = res.json()
        except ValueError as e:
            logger.error("Mux %s %s returned non-JSON body", method, path)
            raise UpstreamError() from e
        data = body.get("data") if isinstance(body, dict) else None
        return data if isinstance(data, dict) else {}

    async def create_direct_upload(self, *, cors_origin: str | None = None) -> DirectUpload:
        payload = {
            "cors_origin": (cors_origin or "").strip() or self.config.default_cors_origin,
            "new_asset_settings": {
                "playback_policy": list(self.config.playback_policy),
                "encoding_tier": self.config.encoding_tier,
                "max_resolution_tier": self.config.max_resolution_tier,
                "test": self.config.test_mode,
            },
        }
        data = await self._request("POST", "/uploads", json=payload)
        if not data.get("id") or not data.get("url"):
            logger.error("Mux upload response missing id/url: %s", data)
            raise UpstreamError("Failed to create upload URL")
        return DirectUpload(upload_id=str(data["id"]), upload_url=str(data["url"]))

    async def get_upload(self, upload_id: str) -> UploadInfo:
        data = await self._request("GET", f"/uploads/{upload_id}")
        return UploadInfo(
            id=str(data.get("id") or upload_id),
            status=str(data.get("status") or ""),
            asset_id=data.get("asset_id"),
            error=data.get("error"),
        )

    async def get_asset(self, asset_id: str) -> AssetInfo:
        data = await self._request("GET", f"/assets/{asset_id}")
        data.setdefault("id", asset_id)
        return _parse_asset(data)

    async def delete_asset(self, asset_id: str) -> None:
        await self._request("DELETE", f"/assets/{asset_id}")

    def verify_webhook_signature(self, raw_body: bytes, header: str | None) -> None:
        verify_signature(
            raw_body=raw_body,
            header=header,
            secret=self.config.webhook_secret,
            tolerance_seconds=self.config.webhook_tolerance_seconds,
        )

    def get_thumbnail_url(self, playback_id: str, **options: Any) -> str:
        return urls.thumbnail_url(playback_id, **options)

    def get_streaming_url(self, playback_id: str) -> str:
        return urls.streaming_url(playback_id)

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from yogaflow.core.errors import UpstreamError
from yogaflow.core.security import create_access_token
from yogaflow.core.settings import get_settings
from yogaflow.db.models.user import User
from yogaflow.mux import urls
from yogaflow.mux.signature import compute_signature, verify_signature
from yogaflow.mux.types import AssetInfo, DirectUpload, PlaybackId, UploadInfo

WEBHOOK_SECRET = "whsec_test_secret"


def sign_webhook(raw_body: bytes, *, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    ts = int(time.time()) if timestamp is None else timestamp
    return f"t={ts},v1={compute_signature(secret=secret, timestamp=ts, raw_body=raw_body)}"


@dataclass
class FakeVideoService:
    """In-memory stand-in for the Mux adapter; records every outbound call."""

    secret: str = WEBHOOK_SECRET
    uploads: dict[str, UploadInfo] = field(default_factory=dict)
    assets: dict[str, AssetInfo] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)
    fail_with: Exception | None = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def create_direct_upload(self, *, cors_origin: str | None = None) -> DirectUpload:
        self.calls.append(("create_direct_upload", cors_origin))
        self._maybe_fail()
        upload_id = f"up_{len(self.uploads) + 1}"
        self.uploads[upload_id] = UploadInfo(id=upload_id, status="waiting")
        return DirectUpload(upload_id=upload_id, upload_url=f"https://storage.example/{upload_id}")

    async def get_upload(self, upload_id: str) -> UploadInfo:
        self.calls.append(("get_upload", upload_id))
        self._maybe_fail()
        if upload_id not in self.uploads:
            raise UpstreamError()
        return self.uploads[upload_id]

    async def get_asset(self, asset_id: str) -> AssetInfo:
        self.calls.append(("get_asset", asset_id))
        self._maybe_fail()
        if asset_id not in self.assets:
            raise UpstreamError()
        return self.assets[asset_id]

    async def delete_asset(self, asset_id: str) -> None:
        self.calls.append(("delete_asset", asset_id))
        self._maybe_fail()
        self.assets.pop(asset_id, None)

    def verify_webhook_signature(self, raw_body: bytes, header: str | None) -> None:
        verify_signature(raw_body=raw_body, header=header, secret=self.secret)

    def get_thumbnail_url(self, playback_id: str, **options: Any) -> str:
        return urls.thumbnail_url(playback_id, **options)

    def get_streaming_url(self, playback_id: str) -> str:
        return urls.streaming_url(playback_id)


def make_asset(asset_id: str = "as_1", *, playback_ids: tuple[str, ...] = ("pb_1",), status: str = "ready") -> AssetInfo:
    return AssetInfo(
        id=asset_id,
        status=status,
        duration=642.0,
        aspect_ratio="16:9",
        playback_ids=[PlaybackId(id=p, policy="public") for p in playback_ids],
    )


def login_as(client: httpx.AsyncClient, user: User) -> None:
    settings = get_settings()
    token = create_access_token(
        subject=str(user.id),
        ttl_seconds=settings.jwt_access_ttl_seconds,
        secret=settings.jwt_secret,
    )
    client.cookies.clear()
    client.cookies.set(settings.access_cookie_name, token)

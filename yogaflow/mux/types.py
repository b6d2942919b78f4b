from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MuxStatus(str, Enum):
    """Asset status persisted on a class row. ``None`` in the column means absent."""

    PREPARING = "preparing"
    READY = "ready"
    ERRORED = "errored"


TERMINAL_STATUSES = frozenset({MuxStatus.READY.value, MuxStatus.ERRORED.value})


@dataclass(frozen=True)
class DirectUpload:
    upload_id: str
    upload_url: str


@dataclass(frozen=True)
class UploadInfo:
    id: str
    status: str
    asset_id: str | None = None
    error: dict[str, Any] | None = None


@dataclass(frozen=True)
class PlaybackId:
    id: str
    policy: str | None = None


@dataclass(frozen=True)
class AssetInfo:
    id: str
    status: str
    duration: float | None = None
    aspect_ratio: str | None = None
    playback_ids: list[PlaybackId] = field(default_factory=list)

    @property
    def first_playback_id(self) -> str | None:
        return self.playback_ids[0].id if self.playback_ids else None

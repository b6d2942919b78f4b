from __future__ import annotations

from typing import Literal
from urllib.parse import urlencode

IMAGE_BASE_URL = "https://image.mux.com"
STREAM_BASE_URL = "https://stream.mux.com"


def _require_playback_id(playback_id: str) -> str:
    pid = (playback_id or "").strip()
    if not pid:
        raise ValueError("playback_id is required")
    return pid


def thumbnail_url(
    playback_id: str,
    *,
    time: float | int | None = None,
    width: int | None = None,
    height: int | None = None,
    fit_mode: Literal["preserve", "crop", "pad"] | None = None,
) -> str:
    """
    Build a Mux thumbnail URL:
      https://image.mux.com/{playback_id}/thumbnail.jpg

    Optional query params: time (seconds into the video), width, height, fit_mode.
    """
    pid = _require_playback_id(playback_id)
    base = f"{IMAGE_BASE_URL}/{pid}/thumbnail.jpg"

    params: dict[str, str] = {}
    if time is not None:
        params["time"] = str(time)
    if width:
        params["width"] = str(int(width))
    if height:
        params["height"] = str(int(height))
    if fit_mode:
        params["fit_mode"] = fit_mode

    if not params:
        return base
    return f"{base}?{urlencode(params)}"


def streaming_url(playback_id: str) -> str:
    """HLS manifest URL for a public playback id."""
    return f"{STREAM_BASE_URL}/{_require_playback_id(playback_id)}.m3u8"

from __future__ import annotations

from typing import Any, Protocol

from sqlalchemy import func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession

from yogaflow.db.models.yoga_class import YogaClass
from yogaflow.mux.types import TERMINAL_STATUSES, MuxStatus


class AssetReferenceStore(Protocol):
    """Webhook-driven writes to the Mux columns of class rows. Each returns the matched row count."""

    async def mark_asset_created(self, upload_id: str, asset_id: str) -> int: ...

    async def mark_upload_errored(self, upload_id: str) -> int: ...

    async def mark_asset_ready(
        self,
        asset_id: str,
        *,
        playback_id: str | None = None,
        duration_min: int | None = None,
    ) -> int: ...

    async def mark_asset_errored(self, asset_id: str) -> int: ...


class SqlAssetReferenceStore:
    """
    One UPDATE per event, matched by the Mux identifier.

    Status guards keep redelivered or out-of-order events from moving a row
    backwards:
    - ``asset_created`` only applies while the row is absent or preparing.
    - ``errored`` never overwrites ``ready`` and ``ready`` never overwrites ``errored``.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _apply(self, where: list[Any], values: dict[str, Any]) -> int:
        stmt = (
            update(YogaClass)
            .where(*where)
            .values(**values, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        res = await self.db.execute(stmt)
        await self.db.commit()
        return int(res.rowcount or 0)

    async def mark_asset_created(self, upload_id: str, asset_id: str) -> int:
        return await self._apply(
            [
                YogaClass.mux_upload_id == upload_id,
                or_(YogaClass.mux_status.is_(None), YogaClass.mux_status.not_in(sorted(TERMINAL_STATUSES))),
            ],
            {"mux_asset_id": asset_id, "mux_status": MuxStatus.PREPARING.value},
        )

    async def mark_upload_errored(self, upload_id: str) -> int:
        return await self._apply(
            [
                YogaClass.mux_upload_id == upload_id,
                or_(YogaClass.mux_status.is_(None), YogaClass.mux_status != MuxStatus.READY.value),
            ],
            {"mux_status": MuxStatus.ERRORED.value},
        )

    async def mark_asset_ready(
        self,
        asset_id: str,
        *,
        playback_id: str | None = None,
        duration_min: int | None = None,
    ) -> int:
        values: dict[str, Any] = {"mux_status": MuxStatus.READY.value}
        if playback_id:
            values["mux_playback_id"] = playback_id
        if duration_min is not None:
            values["duration_min"] = int(duration_min)
        return await self._apply(
            [
                YogaClass.mux_asset_id == asset_id,
                or_(YogaClass.mux_status.is_(None), YogaClass.mux_status != MuxStatus.ERRORED.value),
            ],
            values,
        )

    async def mark_asset_errored(self, asset_id: str) -> int:
        return await self._apply(
            [
                YogaClass.mux_asset_id == asset_id,
                or_(YogaClass.mux_status.is_(None), YogaClass.mux_status != MuxStatus.READY.value),
            ],
            {"mux_status": MuxStatus.ERRORED.value},
        )

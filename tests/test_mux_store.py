from __future__ import annotations

import pytest
from sqlalchemy import select

from yogaflow.db.models.yoga_class import YogaClass
from yogaflow.mux.store import SqlAssetReferenceStore


async def _add_class(session_maker, teacher, **fields) -> YogaClass:
    async with session_maker() as session:
        yoga_class = YogaClass(teacher_id=teacher.id, title="Morning Flow", **fields)
        session.add(yoga_class)
        await session.commit()
        await session.refresh(yoga_class)
        return yoga_class


async def _reload(session_maker, class_id) -> YogaClass:
    async with session_maker() as session:
        res = await session.execute(select(YogaClass).where(YogaClass.id == class_id))
        return res.scalar_one()


def _mux_state(row: YogaClass) -> tuple:
    return (row.mux_upload_id, row.mux_asset_id, row.mux_playback_id, row.mux_status, row.duration_min)


@pytest.mark.asyncio
async def test_upload_to_ready_lifecycle(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    row = await _add_class(session_maker, teacher, mux_upload_id="up_1")

    async with session_maker() as session:
        store = SqlAssetReferenceStore(session)
        assert await store.mark_asset_created("up_1", "as_1") == 1

    created = await _reload(session_maker, row.id)
    assert (created.mux_asset_id, created.mux_status) == ("as_1", "preparing")

    async with session_maker() as session:
        store = SqlAssetReferenceStore(session)
        assert await store.mark_asset_ready("as_1", playback_id="pb_1", duration_min=11) == 1

    ready = await _reload(session_maker, row.id)
    assert _mux_state(ready) == ("up_1", "as_1", "pb_1", "ready", 11)


@pytest.mark.asyncio
async def test_asset_ready_is_idempotent(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    row = await _add_class(session_maker, teacher, mux_upload_id="up_1", mux_asset_id="as_1", mux_status="preparing")

    async with session_maker() as session:
        await SqlAssetReferenceStore(session).mark_asset_ready("as_1", playback_id="pb_1", duration_min=11)
    once = _mux_state(await _reload(session_maker, row.id))

    async with session_maker() as session:
        await SqlAssetReferenceStore(session).mark_asset_ready("as_1", playback_id="pb_1", duration_min=11)
    twice = _mux_state(await _reload(session_maker, row.id))

    assert once == twice == ("up_1", "as_1", "pb_1", "ready", 11)


@pytest.mark.asyncio
async def test_ready_without_playback_keeps_existing_values(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    row = await _add_class(
        session_maker, teacher, mux_asset_id="as_1", mux_playback_id="pb_1", mux_status="preparing", duration_min=20
    )

    async with session_maker() as session:
        await SqlAssetReferenceStore(session).mark_asset_ready("as_1")

    reloaded = await _reload(session_maker, row.id)
    assert (reloaded.mux_status, reloaded.mux_playback_id, reloaded.duration_min) == ("ready", "pb_1", 20)


@pytest.mark.asyncio
async def test_errored_from_preparing_and_from_upload(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    preparing = await _add_class(session_maker, teacher, mux_upload_id="up_1", mux_asset_id="as_1", mux_status="preparing")
    pending = await _add_class(session_maker, teacher, mux_upload_id="up_2")

    async with session_maker() as session:
        store = SqlAssetReferenceStore(session)
        assert await store.mark_asset_errored("as_1") == 1
        assert await store.mark_upload_errored("up_2") == 1

    assert (await _reload(session_maker, preparing.id)).mux_status == "errored"
    assert (await _reload(session_maker, pending.id)).mux_status == "errored"


@pytest.mark.asyncio
async def test_terminal_ready_is_not_downgraded(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    row = await _add_class(
        session_maker, teacher, mux_upload_id="up_1", mux_asset_id="as_1", mux_playback_id="pb_1", mux_status="ready"
    )

    async with session_maker() as session:
        store = SqlAssetReferenceStore(session)
        assert await store.mark_asset_errored("as_1") == 0
        assert await store.mark_upload_errored("up_1") == 0
        # Redelivered asset_created must not send a ready row back to preparing.
        assert await store.mark_asset_created("up_1", "as_1") == 0

    assert _mux_state(await _reload(session_maker, row.id)) == ("up_1", "as_1", "pb_1", "ready", 0)


@pytest.mark.asyncio
async def test_terminal_errored_is_not_promoted(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    row = await _add_class(
        session_maker, teacher, mux_upload_id="up_1", mux_asset_id="as_1", mux_status="errored", duration_min=5
    )

    async with session_maker() as session:
        store = SqlAssetReferenceStore(session)
        assert await store.mark_asset_ready("as_1", playback_id="pb_1", duration_min=11) == 0
        assert await store.mark_asset_created("up_1", "as_1") == 0

    assert _mux_state(await _reload(session_maker, row.id)) == ("up_1", "as_1", None, "errored", 5)


@pytest.mark.asyncio
async def test_unknown_ids_match_nothing(session_maker, make_user) -> None:
    teacher = await make_user(role="teacher")
    row = await _add_class(session_maker, teacher, mux_upload_id="up_1")

    async with session_maker() as session:
        store = SqlAssetReferenceStore(session)
        assert await store.mark_asset_created("up_missing", "as_9") == 0
        assert await store.mark_asset_ready("as_missing", playback_id="pb_9") == 0

    reloaded = await _reload(session_maker, row.id)
    assert (reloaded.mux_asset_id, reloaded.mux_status) == (None, None)

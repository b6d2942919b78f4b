from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogaflow.api.deps import require_teacher
from yogaflow.core.errors import NotFoundError
from yogaflow.db.models.user import User
from yogaflow.db.models.yoga_class import YogaClass
from yogaflow.db.session import get_db
from yogaflow.schemas.yoga_class import YogaClassCreate, YogaClassPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teacher/classes", tags=["classes"])


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


async def _get_owned_class(db: AsyncSession, *, class_id: UUID, teacher_id: UUID) -> YogaClass:
    res = await db.execute(
        select(YogaClass).where(YogaClass.id == class_id, YogaClass.teacher_id == teacher_id)
    )
    yoga_class = res.scalar_one_or_none()
    if yoga_class is None:
        raise NotFoundError("Class not found")
    return yoga_class


@router.get("", response_model=list[YogaClassPublic])
async def list_classes(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[YogaClass]:
    res = await db.execute(
        select(YogaClass)
        .where(YogaClass.teacher_id == current_user.id)
        .order_by(YogaClass.created_at.desc())
    )
    return list(res.scalars().all())


@router.post("", response_model=YogaClassPublic)
async def create_class(
    body: YogaClassCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> YogaClass:
    """
    Register a class, optionally pointing at a pending Mux direct upload.

    The Mux status starts absent; webhooks fill in the asset id, playback id
    and status as the upload is processed.
    """
    yoga_class = YogaClass(
        teacher_id=current_user.id,
        title=body.title.strip(),
        description=_clean(body.description),
        duration_min=body.duration_min,
        video_type="mux",
        thumbnail_url=_clean(body.thumbnail_url),
        difficulty=_clean(body.difficulty),
        intensity=_clean(body.intensity),
        style=_clean(body.style),
        mux_upload_id=_clean(body.mux_upload_id),
    )
    db.add(yoga_class)
    await db.commit()
    await db.refresh(yoga_class)
    logger.info("Class %s created by %s (upload=%s)", yoga_class.id, current_user.id, yoga_class.mux_upload_id)
    return yoga_class


@router.get("/{class_id}", response_model=YogaClassPublic)
async def get_class(
    class_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> YogaClass:
    return await _get_owned_class(db, class_id=class_id, teacher_id=current_user.id)


@router.delete("/{class_id}")
async def delete_class(
    class_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> dict:
    yoga_class = await _get_owned_class(db, class_id=class_id, teacher_id=current_user.id)
    await db.delete(yoga_class)
    await db.commit()
    return {"success": True}

from __future__ import annotations

from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogaflow.core.errors import AuthorizationError, ForbiddenError
from yogaflow.core.security import decode_access_token
from yogaflow.core.settings import Settings, get_settings
from yogaflow.db.models.user import User
from yogaflow.db.session import get_db
from yogaflow.mux.client import MuxClient, MuxConfig, VideoService
from yogaflow.mux.store import AssetReferenceStore, SqlAssetReferenceStore


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User | None:
    """Resolve the session cookie to an active user, or None."""
    token = request.cookies.get(settings.access_cookie_name)
    if not token:
        return None

    try:
        payload = decode_access_token(token, settings.jwt_secret)
    except ValueError:
        return None

    try:
        user_id = UUID(str(payload.get("sub")))
    except (TypeError, ValueError):
        return None

    res = await db.execute(select(User).where(User.id == user_id))
    user = res.scalar_one_or_none()
    if user is None or not user.is_active:
        return None
    return user


async def require_user(current_user: User | None = Depends(get_current_user)) -> User:
    if current_user is None:
        raise AuthorizationError()
    return current_user


async def require_teacher(current_user: User | None = Depends(get_current_user)) -> User:
    if current_user is None:
        raise AuthorizationError()
    if not current_user.is_teacher:
        raise ForbiddenError()
    return current_user


def get_video_service(settings: Settings = Depends(get_settings)) -> VideoService:
    return MuxClient(MuxConfig.from_settings(settings))


def get_asset_store(db: AsyncSession = Depends(get_db)) -> AssetReferenceStore:
    return SqlAssetReferenceStore(db)

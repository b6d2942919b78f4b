from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogaflow.core.errors import AuthorizationError
from yogaflow.core.security import (
    clear_access_cookie,
    create_access_token,
    set_access_cookie,
    verify_password,
)
from yogaflow.core.settings import Settings, get_settings
from yogaflow.db.models.user import User
from yogaflow.db.session import get_db
from yogaflow.schemas.auth import LoginRequest, LoginResponse, LogoutResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    res = await db.execute(select(User).where(User.email == body.email.lower().strip()))
    user = res.scalar_one_or_none()

    if user is None or not user.is_active or not verify_password(body.password, user.hashed_password):
        raise AuthorizationError("Invalid credentials")

    access_token = create_access_token(
        subject=str(user.id),
        ttl_seconds=settings.jwt_access_ttl_seconds,
        secret=settings.jwt_secret,
    )

    response = JSONResponse(LoginResponse(ok=True).model_dump())
    set_access_cookie(response=response, token=access_token, settings=settings)
    return response


@router.post("/logout", response_model=LogoutResponse)
async def logout(settings: Settings = Depends(get_settings)):
    response = JSONResponse(LogoutResponse(ok=True).model_dump())
    clear_access_cookie(response=response, settings=settings)
    return response

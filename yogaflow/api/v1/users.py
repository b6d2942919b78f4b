from __future__ import annotations

from fastapi import APIRouter, Depends

from yogaflow.api.deps import require_user
from yogaflow.db.models.user import User
from yogaflow.schemas.user import UserPublic

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserPublic)
async def me(current_user: User = Depends(require_user)) -> User:
    return current_user

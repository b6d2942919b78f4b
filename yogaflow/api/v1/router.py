from __future__ import annotations

from fastapi import APIRouter

from yogaflow.api.v1 import auth, classes, mux, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(classes.router)
api_router.include_router(mux.router)

from __future__ import annotations

from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mux_helpers import FakeVideoService
from yogaflow.api.deps import get_video_service
from yogaflow.core.security import hash_password
from yogaflow.db.base import Base
from yogaflow.db.models import yoga_class as _yoga_class_model  # noqa: F401
from yogaflow.db.models.user import User
from yogaflow.db.session import get_db
from yogaflow.main import app


@pytest.fixture
def fake_video():
    fake = FakeVideoService()
    app.dependency_overrides[get_video_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_video_service, None)


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield maker
    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_user(session_maker):
    async def _make_user(*, role: str = "student", email: str | None = None, password: str = "pw") -> User:
        async with session_maker() as session:
            user = User(
                email=email or f"{role}-{uuid4()}@example.com",
                hashed_password=hash_password(password),
                name=role.title(),
                role=role,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user

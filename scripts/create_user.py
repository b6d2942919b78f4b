from __future__ import annotations

import argparse
import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from yogaflow.core.security import hash_password
from yogaflow.core.settings import get_settings
from yogaflow.db.models.user import ROLE_ADMIN, ROLE_STUDENT, ROLE_TEACHER, User


async def main() -> None:
    parser = argparse.ArgumentParser(description="Create a user (student, teacher or admin) in the database.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default=None)
    parser.add_argument("--role", choices=[ROLE_STUDENT, ROLE_TEACHER, ROLE_ADMIN], default=ROLE_STUDENT)
    args = parser.parse_args()

    email = args.email.lower().strip()
    settings = get_settings()
    engine = create_async_engine(settings.database_url, pool_pre_ping=True)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)

    try:
        async with SessionLocal() as session:
            res = await session.execute(select(User).where(User.email == email))
            existing = res.scalar_one_or_none()
            if existing is not None:
                print(f"User already exists: id={existing.id} email={existing.email} role={existing.role}")
                return

            user = User(
                email=email,
                hashed_password=hash_password(args.password),
                name=(args.name.strip() if args.name else None),
                role=args.role,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            print(f"Created user: id={user.id} email={user.email} role={user.role}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

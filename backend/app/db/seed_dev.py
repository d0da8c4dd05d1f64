"""Dev seeding helper for stub authentication."""

import asyncio
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import get_settings
from backend.app.db.engine import get_session_factory
from backend.app.db.models import User

# Matches Settings.dev_user_id, the identity used when no bearer token is sent
DEV_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


async def seed_dev_user(session: AsyncSession, user_id: uuid.UUID = DEV_USER_ID) -> bool:
    """Create the dev user if it is missing.

    This function is idempotent - safe to run multiple times.

    Returns:
        True if the user was created, False if it already existed
    """
    result = await session.execute(select(User).where(User.user_id == user_id))
    if result.scalar_one_or_none() is not None:
        return False

    session.add(User(user_id=user_id, email="dev@example.com", name="Dev User"))
    await session.commit()
    return True


async def main() -> None:
    """Seed the dev user into the configured database."""
    async with get_session_factory()() as session:
        created = await seed_dev_user(session, get_settings().dev_user_id)

    if created:
        print(f"Created dev user {get_settings().dev_user_id}")
    else:
        print("Dev user already exists")


if __name__ == "__main__":
    asyncio.run(main())

"""
provisioning_api.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Make sure the protected `admin` group exists so global admins can be recorded.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from provisioning_api.db import models  # noqa: F401  # register models on Base.metadata
from provisioning_api.db.base import Base
from provisioning_api.db.repositories.groups import GroupRepo
from provisioning_api.services.protocols import ADMIN_GROUP_ID


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist and seed the admin group.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(bind=engine, expire_on_commit=False)() as session:
        groups = GroupRepo(session)
        if not await groups.group_exists(ADMIN_GROUP_ID):
            await groups.create_group(ADMIN_GROUP_ID)
            await session.commit()

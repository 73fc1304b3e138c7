"""
tests.conftest

Shared fixtures for gateway, repository and HTTP tests.

Responsibilities:
- In-memory fakes of the Directory and UserDirectory protocols.
- A temporary SQLite directory database with seeded groups and users.
- A running app (lifespan entered) plus bearer-token helpers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from provisioning_api.api.app import create_app
from provisioning_api.auth.deps import jwt_config
from provisioning_api.auth.jwt import issue_token
from provisioning_api.db.init_db import init_db
from provisioning_api.db.repositories.groups import GroupRepo
from provisioning_api.db.repositories.users import UserRepo
from provisioning_api.db.session import create_engine, create_sessionmaker
from provisioning_api.errors import NotFoundError
from provisioning_api.services.protocols import ADMIN_GROUP_ID, GroupInfo
from provisioning_api.settings import Settings


class InMemoryDirectory:
    def __init__(self) -> None:
        self.groups: dict[str, str] = {ADMIN_GROUP_ID: ADMIN_GROUP_ID}
        self.members: dict[str, list[str]] = {ADMIN_GROUP_ID: []}
        self.sub_admins: dict[str, list[str]] = {}
        self.refuse_deletes = False
        self.search_calls: list[tuple[str, int | None, int | None]] = []

    def add_group(
        self, gid: str, *, display_name: str | None = None, members: list[str] | None = None
    ) -> None:
        self.groups[gid] = display_name or gid
        self.members[gid] = list(members or [])

    async def search(
        self, term: str, *, limit: int | None = None, offset: int | None = None
    ) -> list[GroupInfo]:
        self.search_calls.append((term, limit, offset))
        found = [
            GroupInfo(gid=gid, display_name=name)
            for gid, name in sorted(self.groups.items())
            if term.lower() in gid.lower() or term.lower() in name.lower()
        ]
        start = offset or 0
        return found[start:] if limit is None else found[start : start + limit]

    async def group_exists(self, gid: str) -> bool:
        return gid in self.groups

    async def get(self, gid: str) -> GroupInfo | None:
        if gid not in self.groups:
            return None
        return GroupInfo(gid=gid, display_name=self.groups[gid])

    async def create_group(self, gid: str) -> GroupInfo:
        self.groups[gid] = gid
        self.members[gid] = []
        return GroupInfo(gid=gid, display_name=gid)

    async def delete_group(self, gid: str) -> bool:
        if self.refuse_deletes:
            return False
        self.groups.pop(gid, None)
        self.members.pop(gid, None)
        self.sub_admins.pop(gid, None)
        return True

    async def is_global_admin(self, uid: str) -> bool:
        return uid in self.members.get(ADMIN_GROUP_ID, [])

    async def is_sub_admin_of_group(self, uid: str, gid: str) -> bool:
        return uid in self.sub_admins.get(gid, [])

    async def get_groups_sub_admins(self, gid: str) -> list[str]:
        return list(self.sub_admins.get(gid, []))

    async def get_users(self, gid: str) -> list[str]:
        return list(self.members.get(gid, []))


class InMemoryUsers:
    def __init__(self) -> None:
        self.expanded: list[str] = []

    async def get_user_detail(self, uid: str) -> dict[str, Any]:
        self.expanded.append(uid)
        if uid.startswith("ghost"):
            raise NotFoundError("User does not exist")
        return {"id": uid, "displayname": uid.title()}


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory()


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")


async def seed_directory(session: AsyncSession) -> None:
    """
    admin: alice
    staff: carol, bob, erin, frank (sub-admin: bob)
    sales: dave (no sub-admins)
    """

    user_repo = UserRepo(session)
    for uid in ("alice", "bob", "carol", "dave", "erin", "frank"):
        await user_repo.create(uid=uid, display_name=uid.title(), email=f"{uid}@example.org")

    groups = GroupRepo(session)
    await groups.add_member(ADMIN_GROUP_ID, "alice")
    await groups.create_group("staff", display_name="Staff")
    for uid in ("carol", "bob", "erin", "frank"):
        await groups.add_member("staff", uid)
    await groups.add_sub_admin("staff", "bob")
    await groups.create_group("sales", display_name="Sales Team")
    await groups.add_member("sales", "dave")
    await session.commit()


@pytest_asyncio.fixture
async def session_factory(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine(settings)
    await init_db(engine)
    factory = create_sessionmaker(engine)
    async with factory() as session:
        await seed_directory(session)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        async with app.state.sessionmaker() as session:
            await seed_directory(session)
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[..., dict[str, str]]:
    def _headers(
        subject: str, *, confirmed: bool = False, confirmed_ago: timedelta = timedelta()
    ) -> dict[str, str]:
        confirmed_at = datetime.now(tz=UTC) - confirmed_ago if confirmed else None
        token = issue_token(
            cfg=jwt_config(settings), subject=subject, password_confirmed_at=confirmed_at
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers

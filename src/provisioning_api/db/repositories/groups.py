"""
provisioning_api.db.repositories.groups

SQL implementation of the `Directory` protocol.

Responsibilities:
- Search, create and delete groups.
- Answer membership, global-admin and sub-admin queries.
- Record memberships and sub-admin assignments (seeding/admin tooling).
"""

from __future__ import annotations

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from provisioning_api.db.models import Group, GroupMembership, SubAdminAssignment
from provisioning_api.errors import ConflictError
from provisioning_api.services.protocols import ADMIN_GROUP_ID, GroupInfo


def _info(group: Group) -> GroupInfo:
    return GroupInfo(gid=group.gid, display_name=group.display_name)


class GroupRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(
        self, term: str, *, limit: int | None = None, offset: int | None = None
    ) -> list[GroupInfo]:
        stmt = select(Group).order_by(Group.gid)
        if term:
            stmt = stmt.where(
                or_(
                    Group.gid.icontains(term, autoescape=True),
                    Group.display_name.icontains(term, autoescape=True),
                )
            )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return [_info(g) for g in (await self._session.execute(stmt)).scalars().all()]

    async def group_exists(self, gid: str) -> bool:
        stmt = select(exists().where(Group.gid == gid))
        return bool((await self._session.execute(stmt)).scalar())

    async def get(self, gid: str) -> GroupInfo | None:
        group = await self._session.get(Group, gid)
        return _info(group) if group is not None else None

    async def create_group(self, gid: str, *, display_name: str | None = None) -> GroupInfo:
        group = Group(gid=gid, display_name=display_name or gid)
        self._session.add(group)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # A concurrent create for the same id won the primary key.
            raise ConflictError(f"Group {gid!r} already exists") from e
        return _info(group)

    async def delete_group(self, gid: str) -> bool:
        await self._session.execute(delete(GroupMembership).where(GroupMembership.gid == gid))
        await self._session.execute(
            delete(SubAdminAssignment).where(SubAdminAssignment.gid == gid)
        )
        result = await self._session.execute(delete(Group).where(Group.gid == gid))
        return result.rowcount > 0

    async def is_global_admin(self, uid: str) -> bool:
        return await self.is_member(ADMIN_GROUP_ID, uid)

    async def is_member(self, gid: str, uid: str) -> bool:
        stmt = select(
            exists().where(GroupMembership.gid == gid, GroupMembership.uid == uid)
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def is_sub_admin_of_group(self, uid: str, gid: str) -> bool:
        stmt = select(
            exists().where(SubAdminAssignment.gid == gid, SubAdminAssignment.uid == uid)
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def get_groups_sub_admins(self, gid: str) -> list[str]:
        stmt = (
            select(SubAdminAssignment.uid)
            .where(SubAdminAssignment.gid == gid)
            .order_by(SubAdminAssignment.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def get_users(self, gid: str) -> list[str]:
        stmt = (
            select(GroupMembership.uid)
            .where(GroupMembership.gid == gid)
            .order_by(GroupMembership.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def add_member(self, gid: str, uid: str) -> None:
        if await self.is_member(gid, uid):
            return
        self._session.add(GroupMembership(gid=gid, uid=uid))
        await self._session.flush()

    async def add_sub_admin(self, gid: str, uid: str) -> None:
        if await self.is_sub_admin_of_group(uid, gid):
            return
        self._session.add(SubAdminAssignment(gid=gid, uid=uid))
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Callers own the transaction: mutations flush here and the API layer commits.

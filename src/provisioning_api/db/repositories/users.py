from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from provisioning_api.db.models import GroupMembership, SubAdminAssignment, User
from provisioning_api.errors import NotFoundError


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        uid: str,
        display_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        language: str = "en",
        quota: str = "none",
        enabled: bool = True,
    ) -> User:
        user = User(
            uid=uid,
            display_name=display_name or uid,
            email=email,
            phone=phone,
            language=language,
            quota=quota,
            enabled=enabled,
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, uid: str) -> User | None:
        return await self._session.get(User, uid)

    async def get_user_detail(self, uid: str) -> dict[str, Any]:
        user = await self.get(uid)
        if user is None:
            raise NotFoundError("User does not exist")

        groups_stmt = (
            select(GroupMembership.gid)
            .where(GroupMembership.uid == uid)
            .order_by(GroupMembership.id)
        )
        subadmin_stmt = (
            select(SubAdminAssignment.gid)
            .where(SubAdminAssignment.uid == uid)
            .order_by(SubAdminAssignment.id)
        )
        groups = list((await self._session.execute(groups_stmt)).scalars().all())
        subadmin = list((await self._session.execute(subadmin_stmt)).scalars().all())

        return {
            "id": user.uid,
            "enabled": user.enabled,
            "displayname": user.display_name,
            "email": user.email,
            "phone": user.phone,
            "language": user.language,
            "quota": user.quota,
            "lastLogin": _epoch_millis(user.last_login),
            "groups": groups,
            "subadmin": subadmin,
        }


def _epoch_millis(value: datetime | None) -> int:
    # Never-logged-in users report 0, matching clients that sort on this field.
    if value is None:
        return 0
    # Stored naive, always UTC.
    return int(value.replace(tzinfo=UTC).timestamp() * 1000)

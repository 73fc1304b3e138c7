"""
provisioning_api.services.group_gateway

Group access gateway: authorization + delegation for group provisioning.

Responsibilities:
- Decide which acting identity may read a group's membership
  (global admin, or sub-admin of that group).
- Validate create/delete requests and protect the `admin` group.
- Delegate everything else to the Directory and UserDirectory collaborators.

Every operation takes the acting identity explicitly and is evaluated against
the live Directory; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any

from provisioning_api.auth.models import Principal
from provisioning_api.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from provisioning_api.observability.logging import get_logger
from provisioning_api.services.protocols import ADMIN_GROUP_ID, Directory, UserDirectory

log = get_logger(__name__)


class GroupAccessGateway:
    def __init__(self, *, directory: Directory, users: UserDirectory) -> None:
        self._directory = directory
        self._users = users

    async def is_authorized_for_group(self, actor: Principal, group_id: str) -> bool:
        if await self._directory.is_global_admin(actor.subject):
            return True
        return await self._directory.is_sub_admin_of_group(actor.subject, group_id)

    async def list_groups(
        self,
        actor: Principal,
        search: str = "",
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[str]:
        groups = await self._directory.search(search, limit=limit, offset=offset)
        return [g.gid for g in groups]

    async def list_groups_detailed(
        self,
        actor: Principal,
        search: str = "",
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, str]]:
        groups = await self._directory.search(search, limit=limit, offset=offset)
        return [{"id": g.gid, "displayname": g.display_name} for g in groups]

    async def list_group_members(self, actor: Principal, group_id: str) -> list[str]:
        members = await self._authorized_members(actor, group_id)
        # Order-preserving de-duplication.
        return list(dict.fromkeys(members))

    async def get_group(self, actor: Principal, group_id: str) -> list[str]:
        """Deprecated alias of `list_group_members`."""
        return await self.list_group_members(actor, group_id)

    async def list_group_members_detailed(
        self,
        actor: Principal,
        group_id: str,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        members = await self._authorized_members(actor, group_id)
        start = offset or 0
        page = members[start:] if limit is None else members[start : start + limit]
        # Users collaborator failures propagate unchanged.
        return [await self._users.get_user_detail(uid) for uid in page]

    async def create_group(self, actor: Principal, group_id: str) -> None:
        if not group_id:
            log.error("group_name_not_supplied", actor=actor.subject)
            raise InvalidInputError("Invalid group name")
        if await self._directory.group_exists(group_id):
            raise ConflictError(f"Group {group_id!r} already exists")
        await self._directory.create_group(group_id)
        log.info("group_created", group_id=group_id, actor=actor.subject)

    async def delete_group(self, actor: Principal, group_id: str) -> None:
        # The protected group is refused even if the directory has lost it.
        if group_id == ADMIN_GROUP_ID:
            log.warning("admin_group_delete_refused", actor=actor.subject)
            raise ForbiddenError("The admin group cannot be deleted")
        if not await self._directory.group_exists(group_id):
            raise NotFoundError()
        if not await self._directory.delete_group(group_id):
            raise ConflictError(f"Group {group_id!r} could not be deleted")
        log.info("group_deleted", group_id=group_id, actor=actor.subject)

    async def list_sub_admins(self, actor: Principal, group_id: str) -> list[str]:
        if await self._directory.get(group_id) is None:
            raise NotFoundError("Group does not exist")
        return await self._directory.get_groups_sub_admins(group_id)

    async def _authorized_members(self, actor: Principal, group_id: str) -> list[str]:
        if not await self._directory.group_exists(group_id):
            raise NotFoundError()
        if not await self.is_authorized_for_group(actor, group_id):
            raise UnauthorizedError()
        return await self._directory.get_users(group_id)


# --- Module Notes -----------------------------------------------------------
# The gateway holds no mutable state and is built per request; the
# Directory is responsible for serializing concurrent create/delete calls.

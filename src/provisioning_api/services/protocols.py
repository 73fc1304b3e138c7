"""
provisioning_api.services.protocols

Narrow collaborator interfaces consumed by the group gateway.

Responsibilities:
- Describe the Directory capability set (groups, membership, admin and sub-admin status).
- Describe the UserDirectory capability set (user detail expansion).
- Define `GroupInfo`, the read-only group view the Directory returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# Protected system group; its members are the global administrators.
ADMIN_GROUP_ID = "admin"


@dataclass(frozen=True, slots=True)
class GroupInfo:
    gid: str
    display_name: str


@runtime_checkable
class Directory(Protocol):
    """Authoritative owner of groups, membership and sub-admin relations.

    Implementations must serialize concurrent create/delete calls for one id.
    """

    async def search(
        self, term: str, *, limit: int | None = None, offset: int | None = None
    ) -> list[GroupInfo]: ...

    async def group_exists(self, gid: str) -> bool: ...

    async def get(self, gid: str) -> GroupInfo | None: ...

    async def create_group(self, gid: str) -> GroupInfo: ...

    async def delete_group(self, gid: str) -> bool:
        """Return False when the directory could not delete the group."""
        ...

    async def is_global_admin(self, uid: str) -> bool: ...

    async def is_sub_admin_of_group(self, uid: str, gid: str) -> bool: ...

    async def get_groups_sub_admins(self, gid: str) -> list[str]: ...

    async def get_users(self, gid: str) -> list[str]: ...


@runtime_checkable
class UserDirectory(Protocol):
    async def get_user_detail(self, uid: str) -> dict[str, Any]: ...


# --- Module Notes -----------------------------------------------------------
# `db.repositories.groups.GroupRepo` and `db.repositories.users.UserRepo` are the
# SQL implementations; tests provide in-memory fakes.

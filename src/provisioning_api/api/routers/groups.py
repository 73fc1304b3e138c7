"""
provisioning_api.api.routers.groups

Group provisioning endpoints.

Responsibilities:
- List and search groups (any authenticated caller).
- List group members, plain and detailed (global admin or group sub-admin).
- Create/delete groups and list sub-admins (global admin; create/delete also
  require a recent password confirmation).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from provisioning_api.api.deps import (
    db_session,
    gateway_dep,
    require_confirmed_admin,
    require_global_admin,
)
from provisioning_api.auth.deps import get_principal
from provisioning_api.auth.models import Principal
from provisioning_api.services.group_gateway import GroupAccessGateway

router = APIRouter(prefix="/v1/groups", tags=["groups"])


class GroupDetail(BaseModel):
    id: str
    displayname: str


class GroupListResponse(BaseModel):
    groups: list[str]


class GroupDetailListResponse(BaseModel):
    groups: list[GroupDetail]


class GroupUsersResponse(BaseModel):
    users: list[str]


class GroupUsersDetailResponse(BaseModel):
    users: list[dict[str, Any]]


class CreateGroupRequest(BaseModel):
    groupid: str = ""


@router.get("", response_model=GroupListResponse)
async def list_groups(
    search: str = "",
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
) -> GroupListResponse:
    groups = await gateway.list_groups(principal, search, limit=limit, offset=offset)
    return GroupListResponse(groups=groups)


@router.get("/details", response_model=GroupDetailListResponse)
async def list_groups_detailed(
    search: str = "",
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
) -> GroupDetailListResponse:
    groups = await gateway.list_groups_detailed(principal, search, limit=limit, offset=offset)
    return GroupDetailListResponse(groups=[GroupDetail(**g) for g in groups])


@router.post("", dependencies=[Depends(require_confirmed_admin)])
async def create_group(
    body: CreateGroupRequest,
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gateway.create_group(principal, body.groupid)
    await session.commit()
    return {}


# Group ids are opaque and may contain "/", so every id segment uses the `path`
# converter and the suffixed routes are registered before the bare `/{group_id:path}`.


@router.get("/{group_id:path}/users/details", response_model=GroupUsersDetailResponse)
async def list_group_members_detailed(
    group_id: str,
    limit: int | None = Query(default=None, ge=0),
    offset: int = Query(default=0, ge=0),
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
) -> GroupUsersDetailResponse:
    users = await gateway.list_group_members_detailed(
        principal, group_id, limit=limit, offset=offset
    )
    return GroupUsersDetailResponse(users=users)


@router.get("/{group_id:path}/users", response_model=GroupUsersResponse)
async def list_group_members(
    group_id: str,
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
) -> GroupUsersResponse:
    return GroupUsersResponse(users=await gateway.list_group_members(principal, group_id))


@router.get("/{group_id:path}/subadmins", response_model=list[str])
async def list_sub_admins(
    group_id: str,
    principal: Principal = Depends(require_global_admin),
    gateway: GroupAccessGateway = Depends(gateway_dep),
) -> list[str]:
    return await gateway.list_sub_admins(principal, group_id)


@router.get("/{group_id:path}", response_model=GroupUsersResponse, deprecated=True)
async def get_group(
    group_id: str,
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
) -> GroupUsersResponse:
    return GroupUsersResponse(users=await gateway.get_group(principal, group_id))


@router.delete("/{group_id:path}", dependencies=[Depends(require_confirmed_admin)])
async def delete_group(
    group_id: str,
    principal: Principal = Depends(get_principal),
    gateway: GroupAccessGateway = Depends(gateway_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gateway.delete_group(principal, group_id)
    await session.commit()
    return {}


# --- Module Notes -----------------------------------------------------------
# `/details` is registered before `/{group_id:path}` so it is never read as a group id.
# Gateway failures are rendered by the handler in `api.errors`.

"""
provisioning_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the request-scoped DB session.
- Build the Directory/UserDirectory implementations and the group gateway per request.
- Enforce the global-admin scope gate for administrative routes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.status import HTTP_403_FORBIDDEN

from provisioning_api.auth.deps import get_principal, require_password_confirmation
from provisioning_api.auth.models import Principal
from provisioning_api.db.repositories.groups import GroupRepo
from provisioning_api.db.repositories.users import UserRepo
from provisioning_api.services.group_gateway import GroupAccessGateway


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the app lifespan (see `provisioning_api.api.app.create_app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped session; mutating routes commit explicitly and close() rolls
    # back whatever a failed request left uncommitted.
    async with session_factory() as session:
        yield session


def directory_dep(session: AsyncSession = Depends(db_session)) -> GroupRepo:
    return GroupRepo(session)


def gateway_dep(
    session: AsyncSession = Depends(db_session),
    directory: GroupRepo = Depends(directory_dep),
) -> GroupAccessGateway:
    return GroupAccessGateway(directory=directory, users=UserRepo(session))


async def require_global_admin(
    principal: Principal = Depends(get_principal),
    directory: GroupRepo = Depends(directory_dep),
) -> Principal:
    if not await directory.is_global_admin(principal.subject):
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN, detail="Logged in user must be an admin"
        )
    return principal


async def require_confirmed_admin(
    confirmed: Principal = Depends(require_password_confirmation),
    admin: Principal = Depends(require_global_admin),
) -> Principal:
    # Both gates resolve the same cached Principal.
    return admin


# --- Module Notes -----------------------------------------------------------
# FastAPI caches dependencies per request, so the gateway, the admin gate and
# the route all share one session.

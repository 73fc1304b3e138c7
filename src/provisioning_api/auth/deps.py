"""
provisioning_api.auth.deps

FastAPI dependency functions for the session.

Responsibilities:
- Convert a bearer token into a typed `Principal` (the acting identity).
- Enforce a recent password confirmation for destructive operations.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import structlog
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from provisioning_api.auth.jwt import (
    PASSWORD_CONFIRMED_CLAIM,
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
)
from provisioning_api.auth.models import Principal
from provisioning_api.settings import Settings, get_settings

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=jwt_config(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")

    confirmed_raw = payload.get(PASSWORD_CONFIRMED_CLAIM)
    confirmed_at: datetime | None = None
    if confirmed_raw is not None:
        if not isinstance(confirmed_raw, int):
            raise HTTPException(
                status_code=HTTP_401_UNAUTHORIZED, detail="Invalid password confirmation claim"
            )
        confirmed_at = datetime.fromtimestamp(confirmed_raw, tz=UTC)

    structlog.contextvars.bind_contextvars(actor=subject)
    return Principal(subject=subject, password_confirmed_at=confirmed_at)


def require_password_confirmation(
    principal: Principal = Depends(get_principal),
    settings: Settings = Depends(get_settings),
) -> Principal:
    window = timedelta(seconds=settings.password_confirmation_ttl_seconds)
    if not principal.password_confirmed_within(window):
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN, detail="Password confirmation is required"
        )
    return principal


# --- Module Notes -----------------------------------------------------------
# The admin scope gate needs the Directory, so it lives in `api.deps` next to
# the DB session dependency.

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_404_NOT_FOUND

from provisioning_api.auth.deps import jwt_config
from provisioning_api.auth.jwt import issue_token
from provisioning_api.settings import Settings, get_settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=64)
    password_confirmed: bool = False
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(get_settings),
) -> DevTokenResponse:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    token = issue_token(
        cfg=jwt_config(settings),
        subject=body.subject,
        ttl=timedelta(minutes=body.ttl_minutes),
        password_confirmed_at=datetime.now(tz=UTC) if body.password_confirmed else None,
    )
    return DevTokenResponse(access_token=token)

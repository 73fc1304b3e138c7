"""
provisioning_api.api.errors

HTTP mapping for the group provisioning failure taxonomy.

Responsibilities:
- Translate `GroupAccessError` kinds into status codes.
- Render failures as `{"error": {"kind": ..., "message": ...}}`.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from provisioning_api.errors import ErrorKind, GroupAccessError
from provisioning_api.observability.logging import get_logger

log = get_logger(__name__)

# Unauthorized maps to 403: the caller is authenticated but may not read this group.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.not_found: HTTP_404_NOT_FOUND,
    ErrorKind.unauthorized: HTTP_403_FORBIDDEN,
    ErrorKind.forbidden: HTTP_403_FORBIDDEN,
    ErrorKind.conflict: HTTP_409_CONFLICT,
    ErrorKind.invalid_input: HTTP_400_BAD_REQUEST,
}


async def group_access_error_handler(request: Request, exc: GroupAccessError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    log.info("request_rejected", kind=exc.kind.value, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content={"error": {"kind": exc.kind.value, "message": exc.message}},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GroupAccessError, group_access_error_handler)

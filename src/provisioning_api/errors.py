"""
provisioning_api.errors

Failure taxonomy for group provisioning operations.

Responsibilities:
- Define one exception type per failure kind (NotFound, Unauthorized, Forbidden,
  Conflict, InvalidInput), each carrying a kind and a human-readable message.
- Stay transport-agnostic; the HTTP mapping lives in `api.errors`.
"""

from __future__ import annotations

import enum
from typing import ClassVar


class ErrorKind(enum.StrEnum):
    # Values are part of the error payload contract; treat them as stable.
    not_found = "NOT_FOUND"
    unauthorized = "UNAUTHORIZED"
    forbidden = "FORBIDDEN"
    conflict = "CONFLICT"
    invalid_input = "INVALID_INPUT"


class GroupAccessError(Exception):
    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = ""

    def __init__(self, message: str | None = None) -> None:
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class NotFoundError(GroupAccessError):
    kind = ErrorKind.not_found
    default_message = "The requested group could not be found"


class UnauthorizedError(GroupAccessError):
    kind = ErrorKind.unauthorized
    default_message = "User does not have access to specified group"


class ForbiddenError(GroupAccessError):
    kind = ErrorKind.forbidden
    default_message = "Operation not permitted"


class ConflictError(GroupAccessError):
    kind = ErrorKind.conflict
    default_message = "Conflicting group state"


class InvalidInputError(GroupAccessError):
    kind = ErrorKind.invalid_input
    default_message = "Invalid input"


# --- Module Notes -----------------------------------------------------------
# Both the gateway and the SQL directory raise these; nothing in the service
# retries or swallows them.

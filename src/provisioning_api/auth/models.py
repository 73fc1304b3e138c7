"""
provisioning_api.auth.models

Acting identity model.

Responsibilities:
- Define the authenticated caller (`Principal`) passed into every gateway call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True, slots=True)
class Principal:
    """
    The user making the current request.

    `password_confirmed_at` is the last time the session re-entered its
    password; None when the token carries no confirmation.
    """

    subject: str
    password_confirmed_at: datetime | None = None

    def password_confirmed_within(self, window: timedelta, *, now: datetime | None = None) -> bool:
        if self.password_confirmed_at is None:
            return False
        now = now or datetime.now(tz=UTC)
        return now - self.password_confirmed_at <= window


# --- Module Notes -----------------------------------------------------------
# Admin and sub-admin status are deliberately absent here: they are read live
# from the Directory on every call.

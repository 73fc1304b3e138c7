"""
provisioning_api.db.models

Directory schema: groups, users, memberships and sub-admin assignments.

Responsibilities:
- Define ORM models for the authoritative group/user directory:
  - Group: opaque id + display name
  - User: id + profile fields returned in user detail records
  - GroupMembership: user <-> group, reported in insertion order
  - SubAdminAssignment: user administers one specific group, insertion order
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from provisioning_api.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no tz-aware column type.
    return datetime.utcnow()


class Group(Base):
    __tablename__ = "groups"

    gid: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class User(Base):
    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")
    quota: Mapped[str] = mapped_column(String(32), nullable=False, default="none")
    enabled: Mapped[bool] = mapped_column(nullable=False, default=True)

    last_login: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class GroupMembership(Base):
    __tablename__ = "group_memberships"

    # Autoincrement id doubles as the membership order reported by the Directory.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gid: Mapped[str] = mapped_column(String(64), ForeignKey("groups.gid"), nullable=False)
    uid: Mapped[str] = mapped_column(String(64), ForeignKey("users.uid"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("gid", "uid"),
        Index("ix_group_memberships_uid", "uid"),
    )


class SubAdminAssignment(Base):
    __tablename__ = "group_sub_admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gid: Mapped[str] = mapped_column(String(64), ForeignKey("groups.gid"), nullable=False)
    uid: Mapped[str] = mapped_column(String(64), ForeignKey("users.uid"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("gid", "uid"),
        Index("ix_group_sub_admins_uid", "uid"),
    )


# --- Module Notes -----------------------------------------------------------
# Memberships and sub-admin rows reference users by id; SQLite does not enforce
# FK cascades by default, so `GroupRepo.delete_group` removes dependents itself.

"""directory schema: groups, users, memberships, sub-admins

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "groups",
        sa.Column("gid", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("gid", name="pk_groups"),
    )
    op.create_table(
        "users",
        sa.Column("uid", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column("quota", sa.String(length=32), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("uid", name="pk_users"),
    )
    for table in ("group_memberships", "group_sub_admins"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("gid", sa.String(length=64), nullable=False),
            sa.Column("uid", sa.String(length=64), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["gid"], ["groups.gid"], name=f"fk_{table}_gid_groups"),
            sa.ForeignKeyConstraint(["uid"], ["users.uid"], name=f"fk_{table}_uid_users"),
            sa.PrimaryKeyConstraint("id", name=f"pk_{table}"),
            sa.UniqueConstraint("gid", "uid", name=f"uq_{table}_gid_uid"),
        )
        op.create_index(f"ix_{table}_uid", table, ["uid"])

    op.execute(
        "INSERT INTO groups (gid, display_name, created_at) "
        "VALUES ('admin', 'admin', CURRENT_TIMESTAMP)"
    )


def downgrade() -> None:
    for table in ("group_sub_admins", "group_memberships"):
        op.drop_index(f"ix_{table}_uid", table_name=table)
        op.drop_table(table)
    op.drop_table("users")
    op.drop_table("groups")

"""Create user, context, capability, preference and block instance tables.

Revision ID: 20261019_platform
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_platform"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create host tables."""
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "SUSPENDED", "DELETED", name="userstatus"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_user_username", "user", ["username"], unique=True)

    op.create_table(
        "context",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contextlevel", sa.Integer(), nullable=False),
        sa.Column("instanceid", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("path", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["parent_id"], ["context.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contextlevel", "instanceid", name="uq_context_level_instance"),
    )
    op.create_index("ix_context_contextlevel", "context", ["contextlevel"], unique=False)

    op.create_table(
        "permission",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("resource", sa.String(length=50), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_permission_name", "permission", ["name"], unique=True)
    op.create_index("ix_permission_resource", "permission", ["resource"], unique=False)

    op.create_table(
        "role",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"]),
        sa.ForeignKeyConstraint(["permission_id"], ["permission.id"]),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
    )

    op.create_table(
        "role_assignment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("context_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"]),
        sa.ForeignKeyConstraint(["context_id"], ["context.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", "context_id", name="uq_role_assignment"),
    )
    op.create_index("ix_role_assignment_user_id", "role_assignment", ["user_id"], unique=False)
    op.create_index("ix_role_assignment_context_id", "role_assignment", ["context_id"], unique=False)

    op.create_table(
        "user_preference",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "name", name="uq_user_preference_name"),
    )
    op.create_index("ix_user_preference_user_id", "user_preference", ["user_id"], unique=False)

    op.create_table(
        "ajax_preference",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "param_type",
            sa.Enum("BOOL", "INT", "TEXT", name="paramtype"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "name", name="uq_ajax_preference_name"),
    )
    op.create_index("ix_ajax_preference_user_id", "ajax_preference", ["user_id"], unique=False)

    op.create_table(
        "block_instance",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("block_name", sa.String(length=100), nullable=False),
        sa.Column("parent_context_id", sa.Integer(), nullable=False),
        sa.Column("config", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["parent_context_id"], ["context.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_block_instance_block_name", "block_instance", ["block_name"], unique=False)


def downgrade() -> None:
    """Drop host tables."""
    op.drop_index("ix_block_instance_block_name", table_name="block_instance")
    op.drop_table("block_instance")
    op.drop_index("ix_user_preference_user_id", table_name="user_preference")
    op.drop_index("ix_ajax_preference_user_id", table_name="ajax_preference")
    op.drop_table("ajax_preference")
    sa.Enum(name="paramtype").drop(op.get_bind(), checkfirst=True)
    op.drop_table("user_preference")
    op.drop_index("ix_role_assignment_context_id", table_name="role_assignment")
    op.drop_index("ix_role_assignment_user_id", table_name="role_assignment")
    op.drop_table("role_assignment")
    op.drop_table("role_permissions")
    op.drop_index("ix_role_name", table_name="role")
    op.drop_table("role")
    op.drop_index("ix_permission_resource", table_name="permission")
    op.drop_index("ix_permission_name", table_name="permission")
    op.drop_table("permission")
    op.drop_index("ix_context_contextlevel", table_name="context")
    op.drop_table("context")
    op.drop_index("ix_user_username", table_name="user")
    op.drop_table("user")
    sa.Enum(name="userstatus").drop(op.get_bind(), checkfirst=True)

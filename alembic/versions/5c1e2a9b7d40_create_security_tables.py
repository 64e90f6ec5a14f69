"""create_security_tables

Revision ID: 5c1e2a9b7d40
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9b7d40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create users, roles, user_roles and permissions tables."""
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False, comment="Role name"),
        sa.Column(
            "allow_or_deny_by_default",
            sa.Boolean(),
            nullable=False,
            comment="Default policy when no explicit permission matches",
        ),
        sa.Column(
            "description",
            sa.String(length=255),
            nullable=True,
            comment="Description of the role's purpose",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("roles", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_roles_name"), ["name"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("login_name", sa.String(length=64), nullable=False, comment="Login name"),
        sa.Column(
            "login_password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Hashed password (argon2)",
        ),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("account_expired", sa.Boolean(), nullable=False),
        sa.Column("account_locked", sa.Boolean(), nullable=False),
        sa.Column("credentials_expired", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_login_name"), ["login_name"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Integer(), nullable=False, comment="Foreign key to users table"),
        sa.Column("role_id", sa.Integer(), nullable=False, comment="Foreign key to roles table"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
    )

    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "role_id", sa.Integer(), nullable=False, comment="Foreign key to roles table"
        ),
        sa.Column(
            "target_type",
            sa.String(length=64),
            nullable=False,
            comment="Name of the target type",
        ),
        sa.Column(
            "field",
            sa.String(length=255),
            nullable=True,
            comment="Field name, NULL for the type itself",
        ),
        sa.Column("view_allowed", sa.Boolean(), nullable=False),
        sa.Column("create_allowed", sa.Boolean(), nullable=False),
        sa.Column("edit_allowed", sa.Boolean(), nullable=False),
        sa.Column("delete_allowed", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("target_type", "field", name="uq_permissions_target_type_field"),
        sa.CheckConstraint(
            "field IS NULL OR (NOT create_allowed AND NOT delete_allowed)",
            name="ck_permissions_field_type_only_actions",
        ),
    )
    with op.batch_alter_table("permissions", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_permissions_role_id"), ["role_id"], unique=False)
        batch_op.create_index(
            batch_op.f("ix_permissions_target_type"), ["target_type"], unique=False
        )


def downgrade() -> None:
    """Drop the security tables."""
    with op.batch_alter_table("permissions", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_permissions_target_type"))
        batch_op.drop_index(batch_op.f("ix_permissions_role_id"))
    op.drop_table("permissions")

    op.drop_table("user_roles")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_login_name"))
    op.drop_table("users")

    with op.batch_alter_table("roles", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_roles_name"))
    op.drop_table("roles")

"""Create users and tasks tables.

Revision ID: initial_20261001
Revises:
Create Date: 2026-10-01 00:00:00.000000
"""
from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from alembic import op
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = "initial_20261001"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLE = postgresql.ENUM("ADMIN", "EMPLOYEE", name="userrole", create_type=False)
TASK_STATUS = postgresql.ENUM(
    "PENDING", "IN_PROGRESS", "COMPLETED", "ON_HOLD", name="taskstatus", create_type=False
)
TASK_PRIORITY = postgresql.ENUM("LOW", "MEDIUM", "HIGH", name="taskpriority", create_type=False)


def upgrade() -> None:
    """Create the base schema."""
    bind = op.get_bind()
    inspector = inspect(bind)
    existing_tables = set(inspector.get_table_names())

    for enum_type in (USER_ROLE, TASK_STATUS, TASK_PRIORITY):
        enum_type.create(bind, checkfirst=True)

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.UUID(), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("first_name", sa.String(length=255), nullable=False),
            sa.Column("last_name", sa.String(length=255), nullable=False),
            sa.Column("role", USER_ROLE, nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
        op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
        op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)

    if "tasks" not in existing_tables:
        op.create_table(
            "tasks",
            sa.Column("id", sa.UUID(), nullable=False),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("priority", TASK_PRIORITY, nullable=False),
            sa.Column("status", TASK_STATUS, nullable=False),
            sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
            sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
            sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("created_by_id", sa.UUID(), nullable=True),
            sa.Column("assigned_to_id", sa.UUID(), nullable=False),
            sa.Column("pending_requested_status", TASK_STATUS, nullable=True),
            sa.Column("pending_requested_by_id", sa.UUID(), nullable=True),
            sa.Column("pending_requested_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="SET NULL"),
            sa.ForeignKeyConstraint(["assigned_to_id"], ["users.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["pending_requested_by_id"], ["users.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_tasks_id"), "tasks", ["id"], unique=False)
        op.create_index(op.f("ix_tasks_priority"), "tasks", ["priority"], unique=False)
        op.create_index(op.f("ix_tasks_status"), "tasks", ["status"], unique=False)
        op.create_index(op.f("ix_tasks_due_date"), "tasks", ["due_date"], unique=False)
        op.create_index(op.f("ix_tasks_created_by_id"), "tasks", ["created_by_id"], unique=False)
        op.create_index(op.f("ix_tasks_assigned_to_id"), "tasks", ["assigned_to_id"], unique=False)
        op.create_index(op.f("ix_tasks_updated_at"), "tasks", ["updated_at"], unique=False)


def downgrade() -> None:
    """Drop the base schema."""
    op.drop_table("tasks")
    op.drop_table("users")
    bind = op.get_bind()
    for enum_type in (TASK_PRIORITY, TASK_STATUS, USER_ROLE):
        enum_type.drop(bind, checkfirst=True)

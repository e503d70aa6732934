"""Initial tables

Revision ID: 4b1f0c2d9a7e
Revises:
Create Date: 2026-10-17 09:12:31.402118

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b1f0c2d9a7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

correspondence_type = sa.Enum(
    "letter", "email", "request", "submission", "complaint", "inquiry", "other",
    name="correspondence_type",
)
correspondence_priority = sa.Enum("low", "normal", "high", "urgent", name="correspondence_priority")
correspondence_status = sa.Enum("pending", "in_progress", "completed", "overdue", name="correspondence_status")


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=nullable)


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email_address", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=True),
        sa.Column("role", sa.String(32), nullable=False, server_default="staff"),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        _timestamp("created_on"),
        _timestamp("updated_on"),
    )
    op.create_index("ix_users_id", "users", ["id"])

    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("code", sa.String(32), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        _timestamp("created_on"),
    )
    op.create_index("ix_departments_id", "departments", ["id"])

    op.create_table(
        "correspondence",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("reference_number", sa.String(32), nullable=False),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", correspondence_type, nullable=False),
        sa.Column("priority", correspondence_priority, nullable=False),
        sa.Column("status", correspondence_status, nullable=False),
        sa.Column("sender_name", sa.String(255), nullable=False),
        sa.Column("sender_email", sa.String(255), nullable=True),
        sa.Column("sender_phone", sa.String(64), nullable=True),
        sa.Column("sender_organization", sa.String(255), nullable=True),
        sa.Column("sender_address", sa.Text(), nullable=True),
        sa.Column("received_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("assigned_to_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("department_id", sa.Integer(), sa.ForeignKey("departments.id", ondelete="SET NULL"), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("modified_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        _timestamp("created_on"),
        _timestamp("updated_on"),
    )
    op.create_index("ix_correspondence_id", "correspondence", ["id"])
    op.create_index("ix_correspondence_reference_number", "correspondence", ["reference_number"], unique=True)
    op.create_index("idx_correspondence_status", "correspondence", ["status"])
    op.create_index("idx_correspondence_priority", "correspondence", ["priority"])
    op.create_index("idx_correspondence_due_date", "correspondence", ["due_date"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("correspondence_id", sa.Integer(), sa.ForeignKey("correspondence.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_internal", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_on"),
        _timestamp("updated_on"),
    )
    op.create_index("ix_comments_id", "comments", ["id"])
    op.create_index("idx_comments_correspondence", "comments", ["correspondence_id", "created_on"])

    op.create_table(
        "activity_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("correspondence_id", sa.Integer(), sa.ForeignKey("correspondence.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("previous_value", sa.String(64), nullable=True),
        sa.Column("new_value", sa.String(64), nullable=True),
        _timestamp("created_on"),
    )
    op.create_index("ix_activity_log_id", "activity_log", ["id"])
    op.create_index("idx_activity_log_correspondence", "activity_log", ["correspondence_id", "created_on"])


def downgrade():
    op.drop_table("activity_log")
    op.drop_table("comments")
    op.drop_table("correspondence")
    op.drop_table("departments")
    op.drop_table("users")
    correspondence_status.drop(op.get_bind(), checkfirst=True)
    correspondence_priority.drop(op.get_bind(), checkfirst=True)
    correspondence_type.drop(op.get_bind(), checkfirst=True)

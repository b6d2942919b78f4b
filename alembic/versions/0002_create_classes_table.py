"""Create classes table with Mux asset reference columns

Revision ID: 0002_create_classes
Revises: 0001_create_users
Create Date: 2026-09-28

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0002_create_classes"
down_revision = "0001_create_users"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "classes",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("teacher_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration_min", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("video_type", sa.String(length=20), nullable=True),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("difficulty", sa.String(length=20), nullable=True),
        sa.Column("intensity", sa.String(length=20), nullable=True),
        sa.Column("style", sa.String(length=50), nullable=True),
        sa.Column("mux_upload_id", sa.String(length=255), nullable=True),
        sa.Column("mux_asset_id", sa.String(length=255), nullable=True),
        sa.Column("mux_playback_id", sa.String(length=255), nullable=True),
        sa.Column("mux_status", sa.String(length=20), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "mux_status IS NULL OR mux_status IN ('preparing', 'ready', 'errored')",
            name="ck_classes_mux_status",
        ),
    )
    op.create_index("ix_classes_teacher_id", "classes", ["teacher_id"], unique=False)
    op.create_index("ix_classes_mux_upload_id", "classes", ["mux_upload_id"], unique=False)
    op.create_index("ix_classes_mux_asset_id", "classes", ["mux_asset_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_classes_mux_asset_id", table_name="classes")
    op.drop_index("ix_classes_mux_upload_id", table_name="classes")
    op.drop_index("ix_classes_teacher_id", table_name="classes")
    op.drop_table("classes")

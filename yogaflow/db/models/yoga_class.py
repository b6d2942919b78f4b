from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from yogaflow.db.base import Base


class YogaClass(Base):
    __tablename__ = "classes"
    __table_args__ = (
        CheckConstraint(
            "mux_status IS NULL OR mux_status IN ('preparing', 'ready', 'errored')",
            name="ck_classes_mux_status",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    teacher_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_min: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    video_type: Mapped[str | None] = mapped_column(String(20), nullable=True, default="mux")
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    difficulty: Mapped[str | None] = mapped_column(String(20), nullable=True)
    intensity: Mapped[str | None] = mapped_column(String(20), nullable=True)
    style: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Mux asset reference. Webhooks match rows by upload id or asset id, never by our own id,
    # and mux_status NULL means no asset exists yet.
    mux_upload_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    mux_asset_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    mux_playback_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mux_status: Mapped[str | None] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

"""Lead and AnalyticsEvent models - public-facing submissions."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, SiteScopedMixin


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Lead(UUIDMixin, SiteScopedMixin, Base):
    __tablename__ = "lead"

    email: Mapped[str] = mapped_column(String(320), index=True)
    name: Mapped[str | None] = mapped_column(String(200), default=None)
    data_json: Mapped[dict | None] = mapped_column(JSON, default=None)
    source_ip: Mapped[str | None] = mapped_column(String(45), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    # Relationships
    site: Mapped["Site"] = relationship(back_populates="leads")  # noqa: F821


class AnalyticsEvent(UUIDMixin, SiteScopedMixin, Base):
    __tablename__ = "analytics_event"

    event_type: Mapped[str] = mapped_column(String(30), index=True)
    # page_view, cta_click, form_view
    metadata_json: Mapped[dict | None] = mapped_column(JSON, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    # Relationships
    site: Mapped["Site"] = relationship(back_populates="events")  # noqa: F821

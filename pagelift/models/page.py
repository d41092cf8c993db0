"""Page model - section content for a site, published per slug."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, SiteScopedMixin

HOME_SLUG = "home"


class Page(UUIDMixin, TimestampMixin, SiteScopedMixin, Base):
    __tablename__ = "page"
    __table_args__ = (
        UniqueConstraint("site_id", "slug", name="uq_page_site_slug"),
    )

    slug: Mapped[str] = mapped_column(String(100), default=HOME_SLUG)
    title: Mapped[str | None] = mapped_column(String(200), default=None)
    # {"sections": [...]} as produced by the editor; not interpreted here
    content_json: Mapped[dict | None] = mapped_column(JSON, default=None)
    published: Mapped[bool] = mapped_column(Boolean, default=False)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    # Relationships
    site: Mapped["Site"] = relationship(back_populates="pages")  # noqa: F821

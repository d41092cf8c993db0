"""Site model - the tenant root, addressed by subdomain."""

from __future__ import annotations

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin


class Site(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "site"

    name: Mapped[str] = mapped_column(String(200))
    subdomain: Mapped[str] = mapped_column(String(63), unique=True, index=True)
    owner_email: Mapped[str | None] = mapped_column(String(320), default=None)
    settings_json: Mapped[dict | None] = mapped_column(JSON, default=None)

    # Relationships
    pages: Mapped[list["Page"]] = relationship(  # noqa: F821
        back_populates="site", cascade="all, delete-orphan",
        order_by="Page.created_at",
    )
    leads: Mapped[list["Lead"]] = relationship(  # noqa: F821
        back_populates="site", cascade="all, delete-orphan"
    )
    events: Mapped[list["AnalyticsEvent"]] = relationship(  # noqa: F821
        back_populates="site", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Site {self.subdomain!r}>"

"""Analytics event service - record page_view / cta_click / form_view."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import AnalyticsEvent, Site
from . import site_svc
from .lead_svc import SiteNotPublished

VALID_EVENT_TYPES = ("cta_click", "page_view", "form_view")


class InvalidEvent(ValueError):
    """Raised for unknown event types."""


async def track_event(
    db: AsyncSession, site: Site, event_type: str, metadata: dict | None = None,
) -> AnalyticsEvent:
    if event_type not in VALID_EVENT_TYPES:
        raise InvalidEvent("invalid event type")
    if not await site_svc.is_published(db, site.id):
        raise SiteNotPublished("site is not published")

    event = AnalyticsEvent(
        site_id=site.id,
        event_type=event_type,
        metadata_json=metadata or {},
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event

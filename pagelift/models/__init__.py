"""pagelift models - re-exports all models and Base.metadata."""

from .base import Base, UUIDMixin, TimestampMixin, SiteScopedMixin
from .site import Site
from .page import Page, HOME_SLUG
from .lead import Lead, AnalyticsEvent

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "SiteScopedMixin",
    "Site",
    "Page",
    "HOME_SLUG",
    "Lead",
    "AnalyticsEvent",
]

"""Site service - CRUD sites, settings, pages, publishing."""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..config import settings
from ..models import HOME_SLUG, Page, Site

SETTINGS_KEYS = frozenset({"title", "description", "theme", "success_message"})

_SUBDOMAIN_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
_SLUG_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,98}[a-z0-9])?$")


class InvalidSite(ValueError):
    """Raised when site input fails validation."""


class SiteExists(Exception):
    """Raised when the requested subdomain is already taken."""


def normalize_subdomain(value: str) -> str:
    subdomain = (value or "").strip().lower()
    if not _SUBDOMAIN_RE.match(subdomain):
        raise InvalidSite("invalid subdomain")
    if subdomain in settings.reserved_subdomain_set:
        raise InvalidSite("subdomain is reserved")
    return subdomain


def validate_slug(value: str) -> str:
    slug = (value or "").strip().lower()
    if not _SLUG_RE.match(slug):
        raise InvalidSite("invalid page slug")
    return slug


async def get_site_by_subdomain(db: AsyncSession, subdomain: str) -> Site | None:
    stmt = (
        select(Site)
        .where(Site.subdomain == subdomain.strip().lower())
        .options(selectinload(Site.pages))
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_site(
    db: AsyncSession, name: str, subdomain: str, owner_email: str | None = None
) -> Site:
    name = (name or "").strip()
    if not name:
        raise InvalidSite("name is required")
    subdomain = normalize_subdomain(subdomain)

    site = Site(
        name=name,
        subdomain=subdomain,
        owner_email=owner_email,
        settings_json={"title": name},
    )
    site.pages = [Page(slug=HOME_SLUG, title=name, content_json={"sections": []})]
    db.add(site)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise SiteExists(subdomain) from exc
    return await get_site_by_subdomain(db, subdomain)


async def update_site_settings(db: AsyncSession, site: Site, changes: dict) -> Site:
    unknown = set(changes) - SETTINGS_KEYS
    if unknown:
        raise InvalidSite(f"unknown settings: {', '.join(sorted(unknown))}")
    merged = dict(site.settings_json or {})
    merged.update(changes)
    site.settings_json = merged
    await db.commit()
    await db.refresh(site, attribute_names=["settings_json", "updated_at"])
    return site


async def delete_site(db: AsyncSession, site: Site) -> None:
    await db.delete(site)
    await db.commit()


async def get_page(db: AsyncSession, site_id: uuid.UUID, slug: str) -> Page | None:
    stmt = select(Page).where(Page.site_id == site_id, Page.slug == slug)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_published_page(db: AsyncSession, site_id: uuid.UUID, slug: str) -> Page | None:
    stmt = select(Page).where(
        Page.site_id == site_id,
        Page.slug == slug,
        Page.published == True,  # noqa: E712
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def is_published(db: AsyncSession, site_id: uuid.UUID) -> bool:
    """A site counts as live while its home page is published."""
    return await get_published_page(db, site_id, HOME_SLUG) is not None


async def save_page(
    db: AsyncSession,
    site_id: uuid.UUID,
    slug: str,
    content_json: dict | None,
    title: str | None = None,
) -> Page:
    slug = validate_slug(slug)
    page = await get_page(db, site_id, slug)
    if page is None:
        page = Page(site_id=site_id, slug=slug)
        db.add(page)
    page.content_json = content_json or {"sections": []}
    if title is not None:
        page.title = title.strip() or None
    await db.commit()
    await db.refresh(page)
    return page


async def set_published(
    db: AsyncSession, site_id: uuid.UUID, slug: str, published: bool
) -> Page | None:
    page = await get_page(db, site_id, slug)
    if page is None:
        return None
    page.published = published
    page.published_at = datetime.now(timezone.utc) if published else None
    await db.commit()
    await db.refresh(page)
    return page

"""Lead service - validate, normalise and store lead submissions."""

from __future__ import annotations

import re
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Lead, Site
from . import site_svc

LEAD_SOURCE = "website_form"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvalidLead(ValueError):
    """Raised when a submitted lead fails validation."""


class SiteNotPublished(Exception):
    """Raised when a lead or event targets a site that is not live."""


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return bool(_EMAIL_RE.match(email))


async def submit_lead(
    db: AsyncSession,
    site: Site,
    email: str | None,
    name: str | None = None,
    extra: dict | None = None,
    source_ip: str | None = None,
) -> Lead:
    email = (email or "").strip()
    if not is_valid_email(email):
        raise InvalidLead("invalid email address")

    if not await site_svc.is_published(db, site.id):
        raise SiteNotPublished("site is not published")

    data = {"source": LEAD_SOURCE}
    for key, value in (extra or {}).items():
        if key not in data:
            data[key] = value

    lead = Lead(
        site_id=site.id,
        email=email.lower(),
        name=(name or "").strip() or None,
        data_json=data,
        source_ip=source_ip,
    )
    db.add(lead)
    await db.commit()
    await db.refresh(lead)
    return lead


async def list_leads(
    db: AsyncSession, site_id: uuid.UUID, offset: int = 0, limit: int = 50,
) -> tuple[list[Lead], int]:
    limit = max(1, min(limit, 100))
    stmt = select(Lead).where(Lead.site_id == site_id)
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar() or 0
    stmt = stmt.order_by(Lead.created_at.desc()).offset(offset).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all()), total

"""Owner routes - create and manage sites, pages, publishing, leads."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.site import Site
from ..schemas.site import (
    LeadPage,
    LeadResponse,
    PageResponse,
    PageSave,
    PublishToggle,
    SiteCreate,
    SiteResponse,
    SiteSettingsUpdate,
)
from ..services import lead_svc, site_svc
from ..tenant.deps import get_current_site

router = APIRouter(prefix="/sites", tags=["sites"])


@router.post("/", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
async def create_site(payload: SiteCreate, db: AsyncSession = Depends(get_db)):
    try:
        site = await site_svc.create_site(
            db, payload.name, payload.subdomain, owner_email=payload.owner_email
        )
    except site_svc.InvalidSite as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except site_svc.SiteExists as exc:
        raise HTTPException(status_code=409, detail="subdomain already taken") from exc
    return site


@router.get("/{subdomain}", response_model=SiteResponse)
async def get_site(site: Site = Depends(get_current_site)):
    return site


@router.patch("/{subdomain}/settings", response_model=SiteResponse)
async def update_settings(
    payload: SiteSettingsUpdate,
    site: Site = Depends(get_current_site),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await site_svc.update_site_settings(
            db, site, payload.model_dump(exclude_unset=True)
        )
    except site_svc.InvalidSite as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/{subdomain}/pages/{slug}", response_model=PageResponse)
async def save_page(
    slug: str,
    payload: PageSave,
    site: Site = Depends(get_current_site),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await site_svc.save_page(db, site.id, slug, payload.content, title=payload.title)
    except site_svc.InvalidSite as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/{subdomain}/pages/{slug}/publish", response_model=PageResponse)
async def toggle_publish(
    slug: str,
    payload: PublishToggle,
    site: Site = Depends(get_current_site),
    db: AsyncSession = Depends(get_db),
):
    page = await site_svc.set_published(db, site.id, slug.strip().lower(), payload.published)
    if page is None:
        raise HTTPException(status_code=404, detail="page not found")
    return page


@router.get("/{subdomain}/leads", response_model=LeadPage)
async def list_leads(
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
    site: Site = Depends(get_current_site),
    db: AsyncSession = Depends(get_db),
):
    leads, total = await lead_svc.list_leads(db, site.id, offset=offset, limit=limit)
    return LeadPage(items=[LeadResponse.model_validate(lead) for lead in leads], total=total)


@router.delete("/{subdomain}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_site(
    site: Site = Depends(get_current_site),
    db: AsyncSession = Depends(get_db),
):
    await site_svc.delete_site(db, site)

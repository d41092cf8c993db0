"""FastAPI dependencies for site (tenant) resolution."""

from __future__ import annotations

import hmac

from fastapi import Depends, HTTPException, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..models.site import Site
from ..services import site_svc


async def get_public_site(
    subdomain: str = Path(..., description="Site subdomain"),
    db: AsyncSession = Depends(get_db),
) -> Site:
    """Resolve subdomain to Site for public routes. Raises 404 if not found."""
    site = await site_svc.get_site_by_subdomain(db, subdomain)
    if not site:
        raise HTTPException(status_code=404, detail="site not found")
    return site


async def get_current_site(
    request: Request,
    site: Site = Depends(get_public_site),
) -> Site:
    """Resolve subdomain to Site and enforce the per-site access token."""
    expected_token = settings.site_access_tokens_map.get(site.subdomain)
    provided_token = request.headers.get(settings.site_token_header, "").strip()

    if expected_token:
        if not provided_token or not hmac.compare_digest(provided_token, expected_token):
            raise HTTPException(status_code=403, detail="Site access token required")
    elif settings.site_auth_required:
        raise HTTPException(status_code=403, detail="Site authorization required")

    return site

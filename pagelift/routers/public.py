"""Public routes - published page view, lead submission, event tracking."""

from __future__ import annotations

import time

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..models import HOME_SLUG, Site
from ..security.bot_detection import HONEYPOT_FIELD, RENDERED_AT_FIELD
from ..security.client import client_ip, get_admission_gate
from ..services import event_svc, lead_svc, notify_svc, site_svc
from ..services.admission import AdmissionOutcome, LeadAdmissionGate
from ..tenant.deps import get_public_site

router = APIRouter(tags=["public"])
templates = Jinja2Templates(directory=str(settings.templates_dir))

RATE_LIMITED_MESSAGE = "too many attempts, try again later"


async def _read_fields(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}


async def _render_page(request: Request, site: Site, slug: str, db: AsyncSession):
    page = await site_svc.get_published_page(db, site.id, slug)
    if not page:
        return HTMLResponse("<h1>Page not found</h1>", status_code=404)
    content = page.content_json or {}
    return templates.TemplateResponse(request, "public/page.html", {
        "site": site,
        "page": page,
        "sections": content.get("sections", []),
        "site_settings": site.settings_json or {},
        "honeypot_field": HONEYPOT_FIELD,
        "rendered_at_field": RENDERED_AT_FIELD,
        "rendered_at": int(time.time() * 1000),
    })


@router.get("/s/{subdomain}/")
async def public_home(
    request: Request,
    site: Site = Depends(get_public_site),
    db: AsyncSession = Depends(get_db),
):
    return await _render_page(request, site, HOME_SLUG, db)


@router.post("/s/{subdomain}/leads")
async def submit_lead(
    request: Request,
    background_tasks: BackgroundTasks,
    site: Site = Depends(get_public_site),
    db: AsyncSession = Depends(get_db),
    gate: LeadAdmissionGate = Depends(get_admission_gate),
):
    fields = await _read_fields(request)
    ip = client_ip(request)

    decision = gate.evaluate(ip, site.id, fields)
    if decision.outcome is AdmissionOutcome.FAKE_ACCEPTED:
        return {"success": True}
    if decision.outcome is AdmissionOutcome.REJECTED:
        return JSONResponse({"error": RATE_LIMITED_MESSAGE}, status_code=429)

    cleaned = dict(decision.fields)
    email = cleaned.pop("email", None)
    name = cleaned.pop("name", None)
    try:
        lead = await lead_svc.submit_lead(
            db, site,
            email=email if isinstance(email, str) else None,
            name=name if isinstance(name, str) else None,
            extra=cleaned,
            source_ip=ip,
        )
    except (lead_svc.InvalidLead, lead_svc.SiteNotPublished) as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)

    if settings.webhook_configured:
        background_tasks.add_task(
            notify_svc.notify_new_lead, notify_svc.build_lead_payload(site, lead)
        )
    return {"success": True}


@router.post("/s/{subdomain}/events")
async def track_event(
    request: Request,
    site: Site = Depends(get_public_site),
    db: AsyncSession = Depends(get_db),
):
    fields = await _read_fields(request)
    metadata = fields.get("metadata")
    try:
        await event_svc.track_event(
            db, site,
            str(fields.get("event_type", "")),
            metadata if isinstance(metadata, dict) else None,
        )
    except (event_svc.InvalidEvent, lead_svc.SiteNotPublished) as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    return {"success": True}


@router.get("/s/{subdomain}/{page_slug}")
async def public_page(
    request: Request,
    page_slug: str,
    site: Site = Depends(get_public_site),
    db: AsyncSession = Depends(get_db),
):
    return await _render_page(request, site, page_slug.strip().lower(), db)

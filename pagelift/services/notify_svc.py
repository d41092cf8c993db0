"""Outbound webhook notification for new leads."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from ..config import settings
from ..models import Lead, Site

log = logging.getLogger(__name__)


def build_lead_payload(site: Site, lead: Lead) -> dict:
    return {
        "type": "new_lead",
        "siteId": str(site.id),
        "subdomain": site.subdomain,
        "email": lead.email,
        "name": lead.name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def notify_new_lead(payload: dict, transport: httpx.AsyncBaseTransport | None = None) -> bool:
    """POST the payload to the configured webhook. Never raises."""
    url = settings.lead_webhook_url
    if not url:
        return False
    try:
        async with httpx.AsyncClient(
            timeout=settings.lead_webhook_timeout_seconds, transport=transport
        ) as client:
            resp = await client.post(url, json=payload)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        log.warning("lead webhook delivery failed: %s", exc)
        return False
    return True

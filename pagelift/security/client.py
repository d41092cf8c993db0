"""Client identity helpers for rate-limit keys."""

from __future__ import annotations

from fastapi import Request

from ..config import settings
from ..services.admission import LeadAdmissionGate

UNKNOWN_CLIENT = "unknown"


def client_ip(request: Request) -> str:
    """Return the caller's IP, honouring X-Forwarded-For only when trusted."""
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def get_admission_gate(request: Request) -> LeadAdmissionGate:
    """Resolve the gate built by the application factory."""
    gate: LeadAdmissionGate = request.app.state.admission_gate
    return gate

"""Health and readiness checks for the pagelift service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db

router = APIRouter()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "healthy", "service": settings.service_name}


@router.get("/ready")
async def readiness_check(request: Request, db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    gate = request.app.state.admission_gate
    return {
        "status": "ready",
        "service": settings.service_name,
        "rate_limit_keys": {
            "ip": len(gate.ip_limiter),
            "ip_site": len(gate.ip_site_limiter),
        },
    }

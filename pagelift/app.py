"""FastAPI application factory for pagelift."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .services.admission import build_default_gate

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Auto-create tables for SQLite (local dev); PostgreSQL uses Alembic migrations
    if "sqlite" in settings.database_url:
        from .database import engine
        from .models import Base
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_title, lifespan=lifespan)
    # Process-wide limiter state; one gate per application instance
    app.state.admission_gate = build_default_gate()
    log.info(
        "admission gate ready: ip=%r ip_site=%r",
        app.state.admission_gate.ip_limiter,
        app.state.admission_gate.ip_site_limiter,
    )

    from .routers import health, public, sites

    app.include_router(sites.router)
    app.include_router(public.router)
    app.include_router(health.router)
    return app


app = create_app()

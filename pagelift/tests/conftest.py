"""Async test fixtures for pagelift tests using SQLite."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pagelift.database import get_db
from pagelift.models import HOME_SLUG, Base, Page, Site
from pagelift.services.admission import build_default_gate


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


async def _make_site(db: AsyncSession, subdomain: str, published: bool) -> Site:
    site = Site(name=f"{subdomain} site", subdomain=subdomain, settings_json={"title": "Hello"})
    site.pages = [
        Page(
            slug=HOME_SLUG,
            title="Home",
            content_json={"sections": [{"type": "hero", "heading": "Welcome aboard"}]},
            published=published,
        )
    ]
    db.add(site)
    await db.commit()
    await db.refresh(site)
    return site


@pytest_asyncio.fixture
async def site(db: AsyncSession):
    return await _make_site(db, "acme", published=True)


@pytest_asyncio.fixture
async def draft_site(db: AsyncSession):
    return await _make_site(db, "drafty", published=False)


@pytest_asyncio.fixture
async def client(engine):
    """HTTPX async test client against the pagelift app with fresh limiters."""
    from pagelift.app import app

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_gate = app.state.admission_gate
    app.state.admission_gate = build_default_gate()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.state.admission_gate = original_gate
    app.dependency_overrides.clear()

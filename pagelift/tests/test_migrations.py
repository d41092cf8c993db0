"""Smoke tests for pagelift Alembic migrations."""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from pagelift.config import settings


def test_alembic_upgrade_creates_tables(tmp_path: Path, monkeypatch):
    db_path = tmp_path / "pagelift_migrations.db"
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{db_path}")

    package_root = Path(__file__).resolve().parents[1]
    cfg = Config(str(package_root / "alembic.ini"))
    command.upgrade(cfg, "head")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert {"site", "page", "lead", "analytics_event"} <= tables

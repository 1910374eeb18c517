"""
Application Lifespan Tests

Startup runs against the test engine; init_db and close_db are replaced so
no file database is touched.
"""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import scorekeeper.main as main_module
from scorekeeper.config import settings
from scorekeeper.orm import Team


@pytest.fixture
def startup_calls(engine, monkeypatch):
    calls = []

    async def fake_init_db():
        calls.append("init_db")

    async def fake_close_db():
        calls.append("close_db")

    monkeypatch.setattr(main_module, "init_db", fake_init_db)
    monkeypatch.setattr(main_module, "close_db", fake_close_db)
    monkeypatch.setattr(
        main_module,
        "AsyncSessionLocal",
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    )
    return calls


async def _team_names(db_session):
    result = await db_session.execute(select(Team.name).order_by(Team.id))
    return [row[0] for row in result.all()]


@pytest.mark.asyncio
async def test_startup_seeds_teams_when_enabled(startup_calls, db_session, monkeypatch):
    monkeypatch.setattr(settings, "SEED_TEAMS_ON_STARTUP", True)

    async with main_module.lifespan(main_module.app):
        assert startup_calls == ["init_db"]

    assert startup_calls == ["init_db", "close_db"]
    assert await _team_names(db_session) == ["Onça", "Leão", "Tigre", "Lobo"]


@pytest.mark.asyncio
async def test_startup_seeding_is_idempotent(startup_calls, db_session, monkeypatch):
    monkeypatch.setattr(settings, "SEED_TEAMS_ON_STARTUP", True)

    async with main_module.lifespan(main_module.app):
        pass
    async with main_module.lifespan(main_module.app):
        pass

    count = (await db_session.execute(select(func.count()).select_from(Team))).scalar()
    assert count == 4


@pytest.mark.asyncio
async def test_startup_leaves_roster_empty_when_disabled(startup_calls, db_session, monkeypatch):
    monkeypatch.setattr(settings, "SEED_TEAMS_ON_STARTUP", False)

    async with main_module.lifespan(main_module.app):
        pass

    assert await _team_names(db_session) == []

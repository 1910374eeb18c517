"""
Shared fixtures: an isolated in-memory database per test, a seeded roster,
and an HTTP client bound to the app with the database dependency overridden.
"""
from typing import AsyncGenerator, Dict

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from scorekeeper.database import get_db
from scorekeeper.main import app
from scorekeeper.orm import Base, Team, Participant, Activity, ActivityType
from scorekeeper.routes.judge import limiter
from scorekeeper.services import roster_service
from scorekeeper.services.admin_service import bootstrap_teams


# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database; StaticPool keeps the single connection alive."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def teams(db_session) -> Dict[str, Team]:
    """The default roster, keyed by team name."""
    await bootstrap_teams(db_session)
    roster = await roster_service.list_teams(db_session)
    return {team.name: team for team in roster}


@pytest_asyncio.fixture
async def participants(db_session, teams) -> Dict[str, Participant]:
    """Two participants on Onça and one on Lobo."""
    created = {}
    for name, team_name in (("Ana", "Onça"), ("Bruno", "Onça"), ("Carla", "Lobo")):
        participant = Participant(name=name, team_id=teams[team_name].id, points=0)
        participant.team = teams[team_name]
        db_session.add(participant)
        created[name] = participant
    await db_session.commit()
    return created


async def _make_activity(db_session, name: str, activity_type: ActivityType, code: str, active: bool = True):
    activity = Activity(name=name, type=activity_type, code=code, active=active)
    db_session.add(activity)
    await db_session.commit()
    return activity


@pytest_asyncio.fixture
async def team_activity(db_session) -> Activity:
    return await _make_activity(db_session, "Tug of war", ActivityType.TEAM, "TEAM01")


@pytest_asyncio.fixture
async def individual_activity(db_session) -> Activity:
    return await _make_activity(db_session, "Sack race", ActivityType.INDIVIDUAL, "SOLO01")


@pytest_asyncio.fixture
async def inactive_activity(db_session) -> Activity:
    return await _make_activity(db_session, "Closed quiz", ActivityType.TEAM, "SHUT01", active=False)


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


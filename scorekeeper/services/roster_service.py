"""
Roster Service

Read helpers for teams and participants shared by the registry, the
scoring engine, reporting and admin operations.
"""
from typing import List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.errors import ErrorCode, NotFoundError
from scorekeeper.orm.participant import Participant
from scorekeeper.orm.team import Team


async def get_team(db: AsyncSession, team_id: int) -> Team:
    result = await db.execute(select(Team).where(Team.id == team_id))
    team = result.scalar_one_or_none()
    if not team:
        raise NotFoundError(f"Team {team_id} not found", code=ErrorCode.TEAM_NOT_FOUND)
    return team


async def get_participant(db: AsyncSession, participant_id: int) -> Participant:
    result = await db.execute(select(Participant).where(Participant.id == participant_id))
    participant = result.scalar_one_or_none()
    if not participant:
        raise NotFoundError(
            f"Participant {participant_id} not found", code=ErrorCode.PARTICIPANT_NOT_FOUND
        )
    return participant


async def list_teams(db: AsyncSession, ranked: bool = False) -> List[Team]:
    """All teams, in roster order or ranked by points (desc, name asc)."""
    query = select(Team)
    if ranked:
        query = query.order_by(Team.points.desc(), Team.name.asc())
    else:
        query = query.order_by(Team.id.asc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_participants(db: AsyncSession, ranked: bool = False) -> List[Participant]:
    """All participants with their team loaded."""
    query = select(Participant)
    if ranked:
        query = query.order_by(Participant.points.desc(), Participant.name.asc(), Participant.id.asc())
    else:
        query = query.order_by(Participant.name.asc(), Participant.id.asc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def count_teams(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Team))
    return result.scalar() or 0



"""
scorekeeper/routes/public.py
Public leaderboard routes for the ranking display
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.database import get_db
from scorekeeper.services import reporting_service

router = APIRouter(tags=["Ranking"])


@router.get("/teams")
async def get_teams(db: AsyncSession = Depends(get_db)):
    """Teams ranked by points."""
    return await reporting_service.team_ranking(db)


@router.get("/ranking")
async def get_ranking(db: AsyncSession = Depends(get_db)):
    """Teams and participants ranked by points."""
    return await reporting_service.full_ranking(db)

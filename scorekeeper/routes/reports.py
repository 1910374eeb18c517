"""
scorekeeper/routes/reports.py
Read-only score reports
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.database import get_db
from scorekeeper.services import reporting_service

router = APIRouter(prefix="/scores", tags=["Reports"])


@router.get("/history")
async def get_history(db: AsyncSession = Depends(get_db)):
    """All score entries, newest first."""
    return await reporting_service.score_history(db)


@router.get("/by-judge")
async def get_by_judge(db: AsyncSession = Depends(get_db)):
    return await reporting_service.report_by_judge(db)


@router.get("/by-activity")
async def get_by_activity(db: AsyncSession = Depends(get_db)):
    return await reporting_service.report_by_activity(db)


@router.get("/stats")
async def get_stats(db: AsyncSession = Depends(get_db)):
    return await reporting_service.global_statistics(db)

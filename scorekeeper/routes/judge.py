"""
scorekeeper/routes/judge.py
Judge-facing routes: resolve an activity code and submit scores
"""
from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.config import settings
from scorekeeper.database import get_db
from scorekeeper.schemas.scoring import ScoreSubmission
from scorekeeper.services import activity_registry, scoring_engine

router = APIRouter(tags=["Judging"])
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@router.get("/activity/{code}")
async def lookup_activity(code: str, db: AsyncSession = Depends(get_db)):
    """Activity for a judge-entered code, with the teams or participants to score."""
    return await activity_registry.lookup_by_code(db, code)


@router.post("/score", status_code=201)
@limiter.limit(settings.SCORE_RATE_LIMIT)
async def submit_score(
    request: Request,  # Required by slowapi
    data: ScoreSubmission,
    db: AsyncSession = Depends(get_db)
):
    return await scoring_engine.submit_score(
        db,
        activity_id=data.activity_id,
        points=data.points,
        judge_name=data.judge_name,
        team_id=data.team_id,
        participant_id=data.participant_id,
    )

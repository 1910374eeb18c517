"""
scorekeeper/routes/admin.py
Admin routes: roster, participants, activities, reset and point integrity
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.database import get_db
from scorekeeper.schemas.scoring import ActivityCreate, ParticipantCreate
from scorekeeper.services import activity_registry, admin_service, roster_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


# ================= ROSTER =================

@router.post("/init-teams")
async def init_teams(db: AsyncSession = Depends(get_db)):
    """Create the default teams when none exist."""
    return await admin_service.bootstrap_teams(db)


@router.get("/participants")
async def list_participants(db: AsyncSession = Depends(get_db)):
    participants = await roster_service.list_participants(db)
    return [p.to_dict() for p in participants]


@router.post("/participants", status_code=201)
async def create_participant(data: ParticipantCreate, db: AsyncSession = Depends(get_db)):
    participant = await admin_service.create_participant(db, name=data.name, team_id=data.team_id)
    return participant.to_dict()


# ================= ACTIVITIES =================

@router.get("/activities")
async def list_activities(db: AsyncSession = Depends(get_db)):
    """All activities, newest first."""
    activities = await activity_registry.list_activities(db)
    return [a.to_dict() for a in activities]


@router.post("/activities", status_code=201)
async def create_activity(data: ActivityCreate, db: AsyncSession = Depends(get_db)):
    """Create an activity; the response carries the generated lookup code."""
    activity = await activity_registry.create_activity(db, name=data.name, activity_type=data.type)
    return activity.to_dict()


@router.put("/activities/{activity_id}/deactivate")
async def deactivate_activity(activity_id: int, db: AsyncSession = Depends(get_db)):
    activity = await activity_registry.deactivate_activity(db, activity_id)
    return activity.to_dict()


# ================= MAINTENANCE =================

@router.post("/reset")
async def reset_scores(db: AsyncSession = Depends(get_db)):
    """
    Delete every score entry and activity and zero all points.
    Teams and participants are kept.
    """
    logger.warning("Admin reset requested")
    return await admin_service.reset_scoring_state(db)


@router.get("/integrity")
async def check_integrity(db: AsyncSession = Depends(get_db)):
    """Compare stored point totals with the score entry log."""
    return await admin_service.verify_point_totals(db)


@router.post("/recalculate")
async def recalculate_points(db: AsyncSession = Depends(get_db)):
    """Rebuild stored point totals from the score entry log."""
    return await admin_service.recalculate_point_totals(db)

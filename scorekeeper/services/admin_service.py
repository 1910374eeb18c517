"""
Admin Service

Roster bootstrap, participant registration, full scoring reset, and the
integrity audit / rebuild of stored point totals.

Stored totals (Team.points, Participant.points) are counters derived from
the score_entries log:
- participant.points = sum of entries targeting the participant
- team.points = sum of entries targeting the team
              + sum of entries targeting any of its participants
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.config import settings
from scorekeeper.errors import (
    ErrorCode, ValidationError, log_unexpected, require_int, require_text
)
from scorekeeper.orm.activity import Activity
from scorekeeper.orm.participant import Participant
from scorekeeper.orm.score_entry import ScoreEntry
from scorekeeper.orm.team import Team, DEFAULT_TEAM_ROSTER
from scorekeeper.services import roster_service

logger = logging.getLogger(__name__)


async def bootstrap_teams(db: AsyncSession) -> Dict[str, Any]:
    """
    Insert the default roster if the store has no team at all.

    Idempotent: when any team exists this is a no-op, whatever the roster
    looks like.
    """
    existing = await roster_service.count_teams(db)
    if existing > 0:
        logger.info(f"Teams already initialized ({existing} teams) - skipping bootstrap")
        return {
            "success": True,
            "created": False,
            "message": "Teams have already been initialized",
            "total_teams": existing,
        }

    teams = [Team(name=member["name"], color=member["color"], points=0) for member in DEFAULT_TEAM_ROSTER]
    db.add_all(teams)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise log_unexpected(e, "bootstrap_teams")

    logger.info(f"Initialized {len(teams)} default teams")
    return {
        "success": True,
        "created": True,
        "message": "Teams initialized successfully",
        "total_teams": len(teams),
        "teams": [team.to_dict() for team in teams],
    }


async def create_participant(
    db: AsyncSession,
    name: Optional[str],
    team_id: Optional[Any]
) -> Participant:
    """
    Register a participant on an existing team with zero points.

    Raises:
        ValidationError: name or team_id missing
        NotFoundError: team does not exist
    """
    name = require_text(name, "name")
    team_id = require_int(team_id, "team_id")

    team = await roster_service.get_team(db, team_id)

    participant = Participant(name=name, team_id=team.id, points=0)
    participant.team = team
    db.add(participant)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise log_unexpected(e, "create_participant")
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Participant created: {participant.id} ({name}) on team {team.name}")
    return participant


async def reset_scoring_state(db: AsyncSession) -> Dict[str, Any]:
    """
    Wipe all score entries and activities and zero every stored total.

    Teams and participants are kept. Disabled entirely when
    FEATURE_ADMIN_RESET is off.
    """
    if not settings.FEATURE_ADMIN_RESET:
        raise ValidationError("Reset is disabled", code=ErrorCode.FEATURE_DISABLED)

    try:
        entries = await db.execute(delete(ScoreEntry))
        activities = await db.execute(delete(Activity))
        await db.execute(update(Participant).values(points=0))
        await db.execute(update(Team).values(points=0))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise log_unexpected(e, "reset_scoring_state")

    logger.warning(
        f"Scoring state reset: {entries.rowcount} entries and "
        f"{activities.rowcount} activities deleted, all points zeroed"
    )
    return {
        "success": True,
        "message": "Scores reset successfully",
        "deleted_entries": entries.rowcount,
        "deleted_activities": activities.rowcount,
    }


async def _expected_totals(db: AsyncSession) -> Tuple[Dict[int, int], Dict[int, int]]:
    """Point totals recomputed from the entry log: (by team id, by participant id)."""
    by_participant: Dict[int, int] = {}
    result = await db.execute(
        select(ScoreEntry.participant_id, func.sum(ScoreEntry.points))
        .where(ScoreEntry.participant_id.is_not(None))
        .group_by(ScoreEntry.participant_id)
    )
    for participant_id, total in result.all():
        by_participant[participant_id] = int(total or 0)

    by_team: Dict[int, int] = {}
    result = await db.execute(
        select(ScoreEntry.team_id, func.sum(ScoreEntry.points))
        .where(ScoreEntry.team_id.is_not(None))
        .group_by(ScoreEntry.team_id)
    )
    for team_id, total in result.all():
        by_team[team_id] = int(total or 0)

    result = await db.execute(
        select(Participant.team_id, func.sum(ScoreEntry.points))
        .join(Participant, ScoreEntry.participant_id == Participant.id)
        .group_by(Participant.team_id)
    )
    for team_id, total in result.all():
        by_team[team_id] = by_team.get(team_id, 0) + int(total or 0)

    return by_team, by_participant


def _mismatches(
    teams: List[Team],
    participants: List[Participant],
    by_team: Dict[int, int],
    by_participant: Dict[int, int]
) -> List[Dict[str, Any]]:
    found = []
    for team in teams:
        expected = by_team.get(team.id, 0)
        if team.points != expected:
            found.append({
                "type": "team", "id": team.id, "name": team.name,
                "stored": team.points, "expected": expected,
            })
    for participant in participants:
        expected = by_participant.get(participant.id, 0)
        if participant.points != expected:
            found.append({
                "type": "participant", "id": participant.id, "name": participant.name,
                "stored": participant.points, "expected": expected,
            })
    return found


async def verify_point_totals(db: AsyncSession) -> Dict[str, Any]:
    """Audit every stored total against the entry log. Read-only."""
    teams = await roster_service.list_teams(db)
    participants = await roster_service.list_participants(db)
    by_team, by_participant = await _expected_totals(db)

    mismatches = _mismatches(teams, participants, by_team, by_participant)
    if mismatches:
        logger.warning(f"Point integrity check found {len(mismatches)} mismatches")
    else:
        logger.info("Point integrity check passed")

    return {
        "consistent": not mismatches,
        "teams_checked": len(teams),
        "participants_checked": len(participants),
        "mismatches": mismatches,
    }


async def recalculate_point_totals(db: AsyncSession) -> Dict[str, Any]:
    """Overwrite every stored total with the value recomputed from the entry log."""
    teams = await roster_service.list_teams(db)
    participants = await roster_service.list_participants(db)
    by_team, by_participant = await _expected_totals(db)

    mismatches = _mismatches(teams, participants, by_team, by_participant)
    for team in teams:
        team.points = by_team.get(team.id, 0)
    for participant in participants:
        participant.points = by_participant.get(participant.id, 0)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise log_unexpected(e, "recalculate_point_totals")

    logger.info(f"Point totals rebuilt from entry log: {len(mismatches)} corrected")
    return {
        "success": True,
        "teams_updated": len(teams),
        "participants_updated": len(participants),
        "corrected": mismatches,
    }

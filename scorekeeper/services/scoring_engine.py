"""
Scoring Engine

Records a judge's point award and rolls it up to the stored totals.

Write path (single transaction):
1. Validate fields and load the activity (must exist and be active)
2. Resolve the target from the activity type
3. Reject a second vote by the same judge for the same target
4. Insert the ScoreEntry
5. Increment the target's points (and the owning team's, for a participant)
6. Commit once

The unique constraint on (activity_id, judge_name, target_key) is the final
word on duplicates: two concurrent submissions can both pass step 3, but only
one insert survives and the loser is rolled back with no point drift.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.errors import (
    ConflictError, ErrorCode, NotFoundError, ValidationError,
    log_unexpected, require_int, require_text
)
from scorekeeper.orm.activity import Activity, ActivityType
from scorekeeper.orm.participant import Participant
from scorekeeper.orm.score_entry import ScoreEntry, make_target_key, TARGET_TEAM, TARGET_PARTICIPANT
from scorekeeper.orm.team import Team
from scorekeeper.services import roster_service

logger = logging.getLogger(__name__)


# activity type -> (required id field, target kind)
TARGET_RULES = {
    ActivityType.TEAM: ("team_id", TARGET_TEAM),
    ActivityType.INDIVIDUAL: ("participant_id", TARGET_PARTICIPANT),
}

DUPLICATE_MESSAGE = "This judge has already scored this target for this activity"


def resolve_target(
    activity_type: ActivityType,
    team_id: Optional[Any],
    participant_id: Optional[Any]
) -> Tuple[Optional[int], Optional[int]]:
    """
    Pick the target id the activity type asks for.

    Returns (team_id, participant_id) with exactly one set; the id that does
    not apply to this activity type is dropped.
    """
    field, kind = TARGET_RULES[activity_type]
    raw = team_id if kind == TARGET_TEAM else participant_id
    if raw is None or raw == "":
        raise ValidationError(
            f"{field} is required for {activity_type.value} activities",
            code=ErrorCode.MISSING_FIELD,
            details={"field": field, "activity_type": activity_type.value}
        )
    target_id = require_int(raw, field)
    if kind == TARGET_TEAM:
        return target_id, None
    return None, target_id


async def _load_active_activity(db: AsyncSession, activity_id: int) -> Activity:
    result = await db.execute(select(Activity).where(Activity.id == activity_id))
    activity = result.scalar_one_or_none()
    if not activity:
        raise NotFoundError(
            f"Activity {activity_id} not found", code=ErrorCode.ACTIVITY_NOT_FOUND
        )
    if not activity.active:
        raise NotFoundError(
            f"Activity {activity_id} is not active", code=ErrorCode.ACTIVITY_INACTIVE
        )
    return activity


async def _find_existing_entry(
    db: AsyncSession,
    activity_id: int,
    judge_name: str,
    target_key: str
) -> Optional[ScoreEntry]:
    result = await db.execute(
        select(ScoreEntry).where(
            ScoreEntry.activity_id == activity_id,
            ScoreEntry.judge_name == judge_name,
            ScoreEntry.target_key == target_key,
        )
    )
    return result.scalars().first()


async def submit_score(
    db: AsyncSession,
    activity_id: Any,
    points: Any,
    judge_name: Optional[str],
    team_id: Optional[Any] = None,
    participant_id: Optional[Any] = None
) -> Dict[str, Any]:
    """
    Validate and record one score entry, then propagate its points.

    Raises:
        ValidationError: missing/malformed field or missing target id
        NotFoundError: unknown or inactive activity, unknown target
        ConflictError: the judge already scored this target in this activity
        UnexpectedError: store failure (transaction rolled back)
    """
    activity_id = require_int(activity_id, "activity_id")
    judge_name = require_text(judge_name, "judge_name")
    points = require_int(points, "points")

    activity = await _load_active_activity(db, activity_id)
    team_id, participant_id = resolve_target(activity.type, team_id, participant_id)

    # Team that receives the delta: the target itself or the participant's owner
    team, participant = None, None
    if team_id is not None:
        team = await roster_service.get_team(db, team_id)
        owning_team_id = team.id
    else:
        participant = await roster_service.get_participant(db, participant_id)
        owning_team_id = participant.team_id

    target_key = make_target_key(team_id, participant_id)
    existing = await _find_existing_entry(db, activity.id, judge_name, target_key)
    if existing:
        logger.warning(
            f"Duplicate score rejected: judge='{judge_name}' activity={activity.id} target={target_key}"
        )
        raise ConflictError(DUPLICATE_MESSAGE, details={"target": target_key})

    entry = ScoreEntry(
        activity_id=activity.id,
        team_id=team_id,
        participant_id=participant_id,
        target_key=target_key,
        points=points,
        judge_name=judge_name,
    )
    entry.activity = activity
    entry.team = team
    entry.participant = participant

    try:
        db.add(entry)
        await db.flush()

        if participant_id is not None:
            await db.execute(
                update(Participant)
                .where(Participant.id == participant_id)
                .values(points=Participant.points + points)
            )
        await db.execute(
            update(Team)
            .where(Team.id == owning_team_id)
            .values(points=Team.points + points)
        )

        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning(
            f"Duplicate score rejected by constraint: judge='{judge_name}' "
            f"activity={activity_id} target={target_key}"
        )
        raise ConflictError(DUPLICATE_MESSAGE, details={"target": target_key})
    except SQLAlchemyError as e:
        await db.rollback()
        raise log_unexpected(e, "submit_score")
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Score recorded: {points:+d} to {target_key} by '{judge_name}' in activity {activity_id}"
    )
    return {"success": True, "message": "Score recorded successfully"}

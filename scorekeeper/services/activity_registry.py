"""
Activity Registry Service

Creates, lists and deactivates activities, and resolves the short lookup
code a judge types in to the activity plus its votable targets.

Code uniqueness:
- Codes are random, so collisions are possible but rare
- The unique constraint on activities.code is the authority
- On IntegrityError the code is regenerated, up to ACTIVITY_CODE_MAX_ATTEMPTS
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.config import settings
from scorekeeper.errors import (
    ErrorCode, NotFoundError, UnexpectedError, log_unexpected, require_enum, require_text
)
from scorekeeper.orm.activity import Activity, ActivityType
from scorekeeper.services import roster_service

logger = logging.getLogger(__name__)

ACTIVITY_TYPES = [t.value for t in ActivityType]


async def create_activity(
    db: AsyncSession,
    name: Optional[str],
    activity_type: Union[ActivityType, str, None],
    code_factory: Callable[[int], str] = Activity.generate_code,
    max_attempts: Optional[int] = None
) -> Activity:
    """
    Create an active activity with a freshly generated lookup code.

    Raises:
        ValidationError: name missing or type not in {individual, team}
        UnexpectedError: no unique code after max_attempts, or store failure
    """
    name = require_text(name, "name")
    if isinstance(activity_type, ActivityType):
        activity_type = activity_type.value
    type_value = require_enum(activity_type, ACTIVITY_TYPES, "type")

    attempts = max_attempts or settings.ACTIVITY_CODE_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        activity = Activity(
            name=name,
            type=ActivityType(type_value),
            code=code_factory(settings.ACTIVITY_CODE_LENGTH),
            active=True
        )
        db.add(activity)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Activity code collision on attempt {attempt}/{attempts} - regenerating")
            continue
        except SQLAlchemyError as e:
            await db.rollback()
            raise log_unexpected(e, "create_activity")
        except Exception:
            await db.rollback()
            raise

        logger.info(f"Activity created: {activity.id} '{name}' ({type_value}) code={activity.code}")
        return activity

    logger.error(f"Could not generate a unique activity code after {attempts} attempts")
    raise UnexpectedError(
        "Could not generate a unique activity code",
        code=ErrorCode.CODE_GENERATION_FAILED
    )


async def get_activity(db: AsyncSession, activity_id: int) -> Activity:
    result = await db.execute(select(Activity).where(Activity.id == activity_id))
    activity = result.scalar_one_or_none()
    if not activity:
        raise NotFoundError(f"Activity {activity_id} not found", code=ErrorCode.ACTIVITY_NOT_FOUND)
    return activity


async def list_activities(db: AsyncSession) -> List[Activity]:
    """All activities, newest first."""
    result = await db.execute(
        select(Activity).order_by(Activity.created_at.desc(), Activity.id.desc())
    )
    return list(result.scalars().all())


async def deactivate_activity(db: AsyncSession, activity_id: int) -> Activity:
    """Soft-disable an activity. Deactivating twice is a no-op."""
    activity = await get_activity(db, activity_id)
    if activity.active:
        activity.active = False
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise log_unexpected(e, "deactivate_activity")
        logger.info(f"Activity deactivated: {activity.id} code={activity.code}")
    return activity


async def lookup_by_code(db: AsyncSession, code: Optional[str]) -> Dict[str, Any]:
    """
    Resolve a judge-entered code to the activity and its voting targets.

    Matching is case-insensitive and only active activities are returned.
    Team activities carry the full team list; individual activities carry
    every participant with the owning team resolved.
    """
    normalized = Activity.normalize_code(code)
    if not normalized:
        raise NotFoundError("Invalid code or inactive activity", code=ErrorCode.ACTIVITY_NOT_FOUND)

    result = await db.execute(
        select(Activity).where(Activity.code == normalized, Activity.active.is_(True))
    )
    activity = result.scalar_one_or_none()
    if not activity:
        raise NotFoundError(
            "Invalid code or inactive activity",
            code=ErrorCode.ACTIVITY_NOT_FOUND,
            details={"code": normalized}
        )

    payload: Dict[str, Any] = {"activity": activity.to_dict()}
    if activity.type == ActivityType.TEAM:
        teams = await roster_service.list_teams(db)
        payload["teams"] = [team.to_dict() for team in teams]
    else:
        participants = await roster_service.list_participants(db)
        payload["participants"] = [p.to_dict() for p in participants]
    return payload

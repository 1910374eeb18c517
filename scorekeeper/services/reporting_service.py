"""
Ranking & Reporting Service

Read-only views over teams, participants and the score entry log. Nothing
is cached: every report is computed from the store at request time.
"""
from collections import OrderedDict
from typing import Any, Dict, List

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.orm.activity import Activity
from scorekeeper.orm.base import isoformat
from scorekeeper.orm.participant import Participant
from scorekeeper.orm.score_entry import ScoreEntry
from scorekeeper.orm.team import Team
from scorekeeper.services import roster_service


def _average(total: int, count: int) -> float:
    return round(total / count, 2) if count else 0


def _history_item(entry: ScoreEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "judge_name": entry.judge_name,
        "points": entry.points,
        "created_at": isoformat(entry.created_at),
        "activity": entry.activity.to_summary() if entry.activity else None,
        "target": entry.target_summary(),
    }


async def _entries_newest_first(db: AsyncSession) -> List[ScoreEntry]:
    result = await db.execute(
        select(ScoreEntry).order_by(ScoreEntry.created_at.desc(), ScoreEntry.id.desc())
    )
    return list(result.scalars().all())


async def team_ranking(db: AsyncSession) -> List[Dict[str, Any]]:
    """Teams by points, highest first; ties broken by name."""
    teams = await roster_service.list_teams(db, ranked=True)
    return [team.to_dict() for team in teams]


async def full_ranking(db: AsyncSession) -> Dict[str, Any]:
    """Team ranking plus every participant ranked, with the team inline."""
    teams = await roster_service.list_teams(db, ranked=True)
    participants = await roster_service.list_participants(db, ranked=True)
    return {
        "teams": [team.to_dict() for team in teams],
        "participants": [p.to_dict() for p in participants],
    }


async def score_history(db: AsyncSession) -> List[Dict[str, Any]]:
    """Every score entry, newest first, with activity and target resolved."""
    entries = await _entries_newest_first(db)
    return [_history_item(entry) for entry in entries]


async def report_by_judge(db: AsyncSession) -> List[Dict[str, Any]]:
    """
    Entries grouped by judge name.

    Sorted by number of entries (most active judge first), then judge name.
    """
    groups: "OrderedDict[str, List[ScoreEntry]]" = OrderedDict()
    for entry in await _entries_newest_first(db):
        groups.setdefault(entry.judge_name, []).append(entry)

    report = []
    for judge_name, entries in groups.items():
        total = sum(e.points for e in entries)
        report.append({
            "judge_name": judge_name,
            "total_entries": len(entries),
            "total_points": total,
            "average_points": _average(total, len(entries)),
            "entries": [_history_item(e) for e in entries],
        })
    report.sort(key=lambda item: (-item["total_entries"], item["judge_name"]))
    return report


async def report_by_activity(db: AsyncSession) -> List[Dict[str, Any]]:
    """
    Entries grouped by activity, with the distinct judges who scored it.

    Activities without entries are not listed.
    """
    groups: "OrderedDict[int, List[ScoreEntry]]" = OrderedDict()
    for entry in await _entries_newest_first(db):
        groups.setdefault(entry.activity_id, []).append(entry)

    report = []
    for activity_id, entries in groups.items():
        total = sum(e.points for e in entries)
        judges = sorted({e.judge_name for e in entries})
        activity = entries[0].activity
        report.append({
            "activity": activity.to_summary() if activity else {"id": activity_id},
            "total_entries": len(entries),
            "total_points": total,
            "average_points": _average(total, len(entries)),
            "total_judges": len(judges),
            "judges": judges,
            "entries": [_history_item(e) for e in entries],
        })
    report.sort(key=lambda item: (-item["total_entries"], item["activity"]["id"]))
    return report


async def global_statistics(db: AsyncSession) -> Dict[str, Any]:
    """Aggregate figures over the whole entry log. Empty store gives zeros."""
    result = await db.execute(
        select(
            func.count(ScoreEntry.id),
            func.coalesce(func.sum(ScoreEntry.points), 0),
            func.max(ScoreEntry.points),
            func.min(ScoreEntry.points),
        )
    )
    total_entries, total_points, highest, lowest = result.one()

    judges_result = await db.execute(
        select(distinct(ScoreEntry.judge_name)).order_by(ScoreEntry.judge_name.asc())
    )
    judges = [row[0] for row in judges_result.all()]

    total_activities = (await db.execute(select(func.count()).select_from(Activity))).scalar() or 0
    total_teams = (await db.execute(select(func.count()).select_from(Team))).scalar() or 0
    total_participants = (await db.execute(select(func.count()).select_from(Participant))).scalar() or 0

    total_entries = total_entries or 0
    total_points = int(total_points or 0)
    return {
        "total_entries": total_entries,
        "total_points": total_points,
        "average_points": _average(total_points, total_entries),
        "highest_points": highest if highest is not None else 0,
        "lowest_points": lowest if lowest is not None else 0,
        "total_judges": len(judges),
        "judges": judges,
        "total_activities": total_activities,
        "total_teams": total_teams,
        "total_participants": total_participants,
    }

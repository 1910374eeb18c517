"""
Admin Operations Tests

Coverage:
- Roster bootstrap (first run and idempotent re-run)
- Participant registration
- Reset policy and feature flag
- Point integrity audit and rebuild
"""
import pytest
from sqlalchemy import func, select, update

from scorekeeper.config import settings
from scorekeeper.errors import ErrorCode, NotFoundError, ValidationError
from scorekeeper.orm import Activity, Participant, ScoreEntry, Team
from scorekeeper.services import admin_service, roster_service, scoring_engine


async def _count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar()


# =============================================================================
# Bootstrap
# =============================================================================

@pytest.mark.asyncio
async def test_bootstrap_creates_default_roster(db_session):
    result = await admin_service.bootstrap_teams(db_session)

    assert result["created"] is True
    assert [(t["name"], t["color"], t["points"]) for t in result["teams"]] == [
        ("Onça", "#FF5722", 0),
        ("Leão", "#FFC107", 0),
        ("Tigre", "#FF9800", 0),
        ("Lobo", "#607D8B", 0),
    ]


@pytest.mark.asyncio
async def test_bootstrap_is_idempotent(db_session):
    await admin_service.bootstrap_teams(db_session)
    again = await admin_service.bootstrap_teams(db_session)

    assert again["created"] is False
    assert "already" in again["message"]
    assert await _count(db_session, Team) == 4


def test_team_names_are_a_closed_set():
    with pytest.raises(ValueError):
        Team(name="Panda", color="#000000")


# =============================================================================
# Participants
# =============================================================================

@pytest.mark.asyncio
async def test_create_participant(db_session, teams):
    participant = await admin_service.create_participant(db_session, "  Davi ", teams["Tigre"].id)

    data = participant.to_dict()
    assert data["name"] == "Davi"
    assert data["points"] == 0
    assert data["team"]["name"] == "Tigre"


@pytest.mark.asyncio
async def test_create_participant_accepts_numeric_string_team_id(db_session, teams):
    participant = await admin_service.create_participant(db_session, "Eva", str(teams["Leão"].id))
    assert participant.team_id == teams["Leão"].id


@pytest.mark.asyncio
@pytest.mark.parametrize("name,team_key", [(None, "Onça"), ("  ", "Onça"), ("Davi", None)])
async def test_create_participant_requires_fields(db_session, teams, name, team_key):
    team_id = teams[team_key].id if team_key else None
    with pytest.raises(ValidationError) as exc_info:
        await admin_service.create_participant(db_session, name, team_id)
    assert exc_info.value.code == ErrorCode.MISSING_FIELD


@pytest.mark.asyncio
async def test_create_participant_unknown_team(db_session, teams):
    with pytest.raises(NotFoundError) as exc_info:
        await admin_service.create_participant(db_session, "Davi", 999)
    assert exc_info.value.code == ErrorCode.TEAM_NOT_FOUND
    assert await _count(db_session, Participant) == 0


@pytest.mark.asyncio
async def test_list_participants_sorted_by_name(db_session, participants):
    listed = await roster_service.list_participants(db_session)
    assert [p.name for p in listed] == ["Ana", "Bruno", "Carla"]


# =============================================================================
# Reset
# =============================================================================

@pytest.mark.asyncio
async def test_reset_wipes_scores_and_activities_keeps_roster(
    db_session, teams, participants, team_activity, individual_activity
):
    await scoring_engine.submit_score(
        db_session, activity_id=team_activity.id, team_id=teams["Leão"].id, points=10, judge_name="J1"
    )
    await scoring_engine.submit_score(
        db_session, activity_id=individual_activity.id, participant_id=participants["Ana"].id,
        points=4, judge_name="J1"
    )

    result = await admin_service.reset_scoring_state(db_session)

    assert result["success"] is True
    assert result["deleted_entries"] == 2
    assert result["deleted_activities"] == 2
    assert await _count(db_session, ScoreEntry) == 0
    assert await _count(db_session, Activity) == 0
    assert await _count(db_session, Team) == 4
    assert await _count(db_session, Participant) == 3

    for obj in list(teams.values()) + list(participants.values()):
        await db_session.refresh(obj)
        assert obj.points == 0


@pytest.mark.asyncio
async def test_reset_disabled_by_feature_flag(db_session, teams, team_activity, monkeypatch):
    monkeypatch.setattr(settings, "FEATURE_ADMIN_RESET", False)

    with pytest.raises(ValidationError) as exc_info:
        await admin_service.reset_scoring_state(db_session)

    assert exc_info.value.message == "Reset is disabled"
    assert exc_info.value.code == ErrorCode.FEATURE_DISABLED
    assert await _count(db_session, Activity) == 1


# =============================================================================
# Integrity
# =============================================================================

@pytest.mark.asyncio
async def test_verify_and_recalculate_repair_drift(db_session, teams, participants, individual_activity):
    await scoring_engine.submit_score(
        db_session, activity_id=individual_activity.id, participant_id=participants["Bruno"].id,
        points=6, judge_name="J1"
    )

    # Simulate a lost update on the team counter
    await db_session.execute(update(Team).where(Team.name == "Onça").values(points=0))
    await db_session.commit()

    report = await admin_service.verify_point_totals(db_session)
    assert report["consistent"] is False
    assert report["mismatches"] == [{
        "type": "team", "id": teams["Onça"].id, "name": "Onça", "stored": 0, "expected": 6,
    }]

    rebuilt = await admin_service.recalculate_point_totals(db_session)
    assert len(rebuilt["corrected"]) == 1

    report = await admin_service.verify_point_totals(db_session)
    assert report["consistent"] is True
    await db_session.refresh(teams["Onça"])
    assert teams["Onça"].points == 6

from .base import Base

from .team import Team, DEFAULT_TEAM_ROSTER, ALLOWED_TEAM_NAMES
from .participant import Participant
from .activity import Activity, ActivityType
from .score_entry import ScoreEntry, make_target_key, TARGET_TEAM, TARGET_PARTICIPANT

__all__ = [
    "Base",
    "Team",
    "DEFAULT_TEAM_ROSTER",
    "ALLOWED_TEAM_NAMES",
    "Participant",
    "Activity",
    "ActivityType",
    "ScoreEntry",
    "make_target_key",
    "TARGET_TEAM",
    "TARGET_PARTICIPANT",
]

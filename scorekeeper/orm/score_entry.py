"""
Score Entry Model

Append-only log of judge point awards.

Immutability guarantees:
- Entries are NEVER updated after creation
- Entries are only deleted by a full reset
- Exactly one of team_id / participant_id is set (check constraint)
- One entry per (activity, judge, target) triple (unique constraint)
"""
from typing import Optional, Dict, Any

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey,
    Index, UniqueConstraint, CheckConstraint, event
)
from sqlalchemy.orm import relationship

from scorekeeper.orm.base import Base, utcnow


TARGET_TEAM = "team"
TARGET_PARTICIPANT = "participant"


def make_target_key(team_id: Optional[int], participant_id: Optional[int]) -> str:
    """
    Single non-null column identifying the scored target.

    SQL treats NULLs as distinct in unique constraints, so (team_id,
    participant_id) cannot carry the duplicate-vote rule on its own.
    """
    if team_id is not None and participant_id is None:
        return f"{TARGET_TEAM}:{team_id}"
    if participant_id is not None and team_id is None:
        return f"{TARGET_PARTICIPANT}:{participant_id}"
    raise ValueError("Exactly one of team_id or participant_id must be set")


class ScoreEntry(Base):
    """
    A single point award by one judge to one target in one activity.

    The stored totals on Team and Participant are derived from these rows.
    """
    __tablename__ = "score_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)

    activity_id = Column(
        Integer,
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False
    )
    team_id = Column(
        Integer,
        ForeignKey("teams.id", ondelete="RESTRICT"),
        nullable=True
    )
    participant_id = Column(
        Integer,
        ForeignKey("participants.id", ondelete="RESTRICT"),
        nullable=True
    )
    target_key = Column(String(64), nullable=False)

    points = Column(Integer, nullable=False)  # signed, penalties allowed
    judge_name = Column(String(255), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    activity = relationship("Activity", lazy="selectin")
    team = relationship("Team", lazy="selectin")
    participant = relationship("Participant", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("activity_id", "judge_name", "target_key", name="uq_score_activity_judge_target"),
        CheckConstraint(
            "(team_id IS NOT NULL AND participant_id IS NULL) OR "
            "(team_id IS NULL AND participant_id IS NOT NULL)",
            name="ck_score_single_target"
        ),
        Index("idx_scores_activity", "activity_id"),
        Index("idx_scores_judge", "judge_name"),
        Index("idx_scores_team", "team_id"),
        Index("idx_scores_participant", "participant_id"),
        Index("idx_scores_created_at", "created_at"),
    )

    def __repr__(self):
        return (
            f"<ScoreEntry(id={self.id}, activity={self.activity_id}, "
            f"target='{self.target_key}', points={self.points}, judge='{self.judge_name}')>"
        )

    def target_summary(self) -> Dict[str, Any]:
        """Display form of the scored target."""
        if self.team_id is not None:
            return {
                "type": TARGET_TEAM,
                "id": self.team_id,
                "name": self.team.name if self.team else None,
                "color": self.team.color if self.team else None,
            }
        participant = self.participant
        return {
            "type": TARGET_PARTICIPANT,
            "id": self.participant_id,
            "name": participant.name if participant else None,
            "team": participant.team.name if participant and participant.team else None,
        }


@event.listens_for(ScoreEntry, "before_insert")
def _fill_target_key(mapper, connection, target):
    """Derive target_key so the unique constraint holds for every insert path."""
    target.target_key = make_target_key(target.team_id, target.participant_id)

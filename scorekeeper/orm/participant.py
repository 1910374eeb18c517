"""
scorekeeper/orm/participant.py
Participant model: an individual competitor owned by exactly one team.
"""
from typing import Dict, Any

from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from scorekeeper.orm.base import BaseModel, isoformat


class Participant(BaseModel):
    """
    Individual competitor.

    `points` is the sum of every score entry targeting this participant.
    Each of those deltas is also counted in the owning team's total.
    """
    __tablename__ = "participants"

    name = Column(String(255), nullable=False)
    team_id = Column(
        Integer,
        ForeignKey("teams.id", ondelete="RESTRICT"),
        nullable=False
    )
    points = Column(Integer, nullable=False, default=0)

    team = relationship("Team", lazy="selectin")

    __table_args__ = (
        Index("idx_participants_team", "team_id"),
    )

    def __repr__(self):
        return f"<Participant(id={self.id}, name='{self.name}', team={self.team_id})>"

    def to_dict(self, include_team: bool = True) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "team_id": self.team_id,
            "points": self.points,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if include_team:
            data["team"] = self.team.to_dict() if self.team else None
        return data

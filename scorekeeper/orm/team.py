"""
scorekeeper/orm/team.py
Team model: the fixed competition roster.

Teams are created once at bootstrap. Their point total is a denormalized
counter that only the scoring engine (and admin reset/recalculate) touches.
"""
from typing import Dict, Any

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import validates

from scorekeeper.orm.base import BaseModel, isoformat


# Default roster inserted by the bootstrap operation, in display order
DEFAULT_TEAM_ROSTER = (
    {"name": "Onça", "color": "#FF5722"},
    {"name": "Leão", "color": "#FFC107"},
    {"name": "Tigre", "color": "#FF9800"},
    {"name": "Lobo", "color": "#607D8B"},
)

ALLOWED_TEAM_NAMES = frozenset(member["name"] for member in DEFAULT_TEAM_ROSTER)


class Team(BaseModel):
    """A competing team. Names come from a closed set and are unique."""
    __tablename__ = "teams"

    name = Column(String(50), nullable=False, unique=True)
    color = Column(String(20), nullable=False)
    points = Column(Integer, nullable=False, default=0)

    @validates('name')
    def validate_name(self, key, name):
        if name not in ALLOWED_TEAM_NAMES:
            raise ValueError(
                f"Invalid team name '{name}'. Must be one of: {', '.join(sorted(ALLOWED_TEAM_NAMES))}"
            )
        return name

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', points={self.points})>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "points": self.points,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

"""
scorekeeper/orm/activity.py
Activity model: a scoring event gated by a short lookup code.
"""
import enum
import re
import secrets
import string
from typing import Dict, Any

from sqlalchemy import Column, String, Boolean, Enum as SQLEnum, Index
from sqlalchemy.orm import validates

from scorekeeper.orm.base import BaseModel, isoformat


CODE_ALPHABET = string.ascii_uppercase + string.digits


class ActivityType(str, enum.Enum):
    """Which kind of target an activity is scored against."""
    INDIVIDUAL = "individual"
    TEAM = "team"


class Activity(BaseModel):
    """
    Scoring event.

    Activities are soft-disabled (active=False) once scoring closes and are
    only removed by a full reset.
    """
    __tablename__ = "activities"

    name = Column(String(255), nullable=False)
    type = Column(SQLEnum(ActivityType, name="activity_type"), nullable=False)
    code = Column(String(16), nullable=False, unique=True)
    active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_activities_active", "active"),
    )

    @staticmethod
    def generate_code(length: int = 6) -> str:
        """Generate a random uppercase alphanumeric lookup code."""
        return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))

    @staticmethod
    def normalize_code(code: str) -> str:
        """Codes are case-insensitive; they are stored and matched uppercase."""
        return (code or "").strip().upper()

    @validates('code')
    def validate_code(self, key, code):
        code = self.normalize_code(code)
        if not re.match(r'^[A-Z0-9]+$', code):
            raise ValueError("Invalid activity code. Expected uppercase letters and digits")
        return code

    def __repr__(self):
        return f"<Activity(id={self.id}, code='{self.code}', type={self.type}, active={self.active})>"

    def to_summary(self) -> Dict[str, Any]:
        """Compact form embedded in score history and reports."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value if self.type else None,
            "code": self.code,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_summary()
        data.update({
            "active": self.active,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        })
        return data

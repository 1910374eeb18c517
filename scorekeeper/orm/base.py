"""
scorekeeper/orm/base.py
Declarative base and the shared timestamped record for roster and activities
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns below."""
    return datetime.utcnow()


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp column for API responses."""
    return value.isoformat() if value else None


class BaseModel(Base):
    """
    Abstract record with an integer id and created/updated timestamps.

    Teams, participants and activities inherit from it. Score entries do
    not: they are never updated, so they carry created_at only.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

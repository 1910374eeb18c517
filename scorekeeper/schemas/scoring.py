"""
Scoring API Schemas (Pydantic)

Request bodies accept snake_case names and the camelCase aliases used by
the browser clients (activityId, teamId, participantId, judgeName).
Field-level rules (required, integer, enum) are enforced by the services so
every entry point reports them the same way.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ParticipantCreate(BaseModel):
    """Request schema for registering a participant."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=255)
    team_id: Optional[Any] = Field(default=None, alias="teamId")


class ActivityCreate(BaseModel):
    """Request schema for creating an activity."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=255)
    type: Optional[str] = None  # individual | team


class ScoreSubmission(BaseModel):
    """A judge's point award. Exactly one target id applies, per activity type."""
    model_config = ConfigDict(populate_by_name=True)

    activity_id: Optional[Any] = Field(default=None, alias="activityId")
    team_id: Optional[Any] = Field(default=None, alias="teamId")
    participant_id: Optional[Any] = Field(default=None, alias="participantId")
    points: Optional[Any] = None  # signed; negative values are penalties
    judge_name: Optional[str] = Field(default=None, alias="judgeName", max_length=255)

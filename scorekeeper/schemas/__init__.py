from .scoring import ParticipantCreate, ActivityCreate, ScoreSubmission

__all__ = ["ParticipantCreate", "ActivityCreate", "ScoreSubmission"]

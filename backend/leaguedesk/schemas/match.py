from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import date as date_type, datetime, timezone
from enum import Enum


class MatchStatus(str, Enum):
    ALL = "all"
    UPCOMING = "upcoming"
    PLAYED = "played"


class MatchCreate(BaseModel):
    home_team: str = Field(..., min_length=1, max_length=50)
    away_team: str = Field(..., min_length=1, max_length=50)
    location: str = Field(..., min_length=1, max_length=100)
    date: date_type
    time: str = Field(..., description="Kick-off as HH:MM (24h)")


class ScoreUpdate(BaseModel):
    home_score: int = Field(..., ge=0)
    away_score: int = Field(..., ge=0)


class Match(BaseModel):
    id: str
    league_id: str
    home_team: str
    away_team: str
    location: str
    date_time: datetime
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    is_played: bool = False

    @validator("date_time", pre=True)
    def _ensure_utc_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    class Config:
        from_attributes = True

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)


class TeamStatsUpdate(BaseModel):
    played: int = Field(..., ge=0)
    won: int = Field(..., ge=0)
    drawn: int = Field(..., ge=0)
    lost: int = Field(..., ge=0)
    goals_scored: int = Field(..., ge=0)
    goals_conceded: int = Field(..., ge=0)


class Team(BaseModel):
    id: str
    league_id: str
    name: str
    rank: int
    played: int
    won: int
    drawn: int
    lost: int
    goals_scored: int
    goals_conceded: int
    goal_difference: int
    points: int
    updated_at: datetime

    class Config:
        from_attributes = True


class TeamNameList(BaseModel):
    league_id: str
    names: List[str]
    cached: bool = False


class RecomputeResult(BaseModel):
    league_id: str
    changed: int
    standings: List[Team]

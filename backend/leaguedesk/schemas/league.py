from pydantic import BaseModel, Field
from datetime import datetime


class LeagueBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)


class LeagueCreate(LeagueBase):
    pass


class League(LeagueBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True

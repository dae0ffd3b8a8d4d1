from pydantic import BaseModel, Field


class TeamPerformanceInput(BaseModel):
    team_name: str
    matches_played: int
    matches_won: int
    matches_drawn: int
    matches_lost: int
    goals_scored: int
    goals_conceded: int
    goal_difference: int


class TeamPerformanceSummary(BaseModel):
    summary: str
    improvement_areas: str = Field(..., alias="improvementAreas")

    class Config:
        populate_by_name = True


class TeamPerformanceResponse(BaseModel):
    team_id: str
    summary: str
    improvement_areas: str
    cached: bool = False

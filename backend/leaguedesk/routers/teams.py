from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from leaguedesk.database import get_db
from leaguedesk.routers.auth import require
from leaguedesk.services.access import Operation, SessionContext
from leaguedesk.services.standings import StandingsService
from leaguedesk.services.summary import (
    PerformanceSummaryService,
    SummaryGenerator,
    generate_performance_summary,
)
from leaguedesk.services.teams import TeamService
from leaguedesk.schemas.summary import TeamPerformanceResponse
from leaguedesk.schemas.team import (
    RecomputeResult,
    Team,
    TeamCreate,
    TeamNameList,
    TeamStatsUpdate,
)

router = APIRouter(prefix="/leagues/{league_id}", tags=["Standings"])


def get_summary_generator() -> SummaryGenerator:
    return generate_performance_summary


@router.get("/teams", response_model=List[Team])
async def get_standings(
    league_id: str,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    """League table ordered by the last computed rank."""
    return StandingsService.list_standings(db, league_id)


@router.post("/teams", response_model=Team, status_code=status.HTTP_201_CREATED)
async def register_team(
    league_id: str,
    team_data: TeamCreate,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.REGISTER_TEAM)),
):
    return TeamService.add_team(db, team_data.name, league_id)


@router.get("/teams/names", response_model=TeamNameList)
async def get_team_names(
    league_id: str,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    names, cached = TeamService.list_team_names(db, league_id)
    return TeamNameList(league_id=league_id, names=names, cached=cached)


@router.get("/teams/{team_id}", response_model=Team)
async def get_team(
    league_id: str,
    team_id: str,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    return TeamService.get_team(db, league_id, team_id)


@router.put("/teams/{team_id}/stats", response_model=Team)
async def update_team_stats(
    league_id: str,
    team_id: str,
    stats: TeamStatsUpdate,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.UPDATE_RESULTS)),
):
    return TeamService.update_team_stats(
        db,
        league_id,
        team_id,
        played=stats.played,
        won=stats.won,
        drawn=stats.drawn,
        lost=stats.lost,
        goals_scored=stats.goals_scored,
        goals_conceded=stats.goals_conceded,
    )


@router.post("/standings/recompute", response_model=RecomputeResult)
async def recompute_standings(
    league_id: str,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.UPDATE_RESULTS)),
):
    changed, standings = StandingsService.recompute_ranks(db, league_id)
    return RecomputeResult(
        league_id=league_id,
        changed=changed,
        standings=[Team.model_validate(team) for team in standings],
    )


@router.get("/teams/{team_id}/summary", response_model=TeamPerformanceResponse)
async def get_team_summary(
    league_id: str,
    team_id: str,
    db: Session = Depends(get_db),
    generator: SummaryGenerator = Depends(get_summary_generator),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    """AI analysis of a team's record, cached until the record changes."""
    return await PerformanceSummaryService.get_summary(db, league_id, team_id, generator=generator)

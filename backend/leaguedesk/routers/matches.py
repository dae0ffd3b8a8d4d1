from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from leaguedesk.database import get_db
from leaguedesk.routers.auth import require
from leaguedesk.services.access import Operation, SessionContext
from leaguedesk.services.matches import MatchService
from leaguedesk.schemas.match import Match, MatchCreate, MatchStatus, ScoreUpdate

router = APIRouter(prefix="/leagues/{league_id}/matches", tags=["Schedule"])


@router.get("", response_model=List[Match])
async def get_matches(
    league_id: str,
    match_status: MatchStatus = Query(MatchStatus.ALL, alias="status"),
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    """Schedule ordered by kick-off."""
    return MatchService.list_matches(db, league_id, status=match_status)


@router.post("", response_model=Match, status_code=status.HTTP_201_CREATED)
async def add_match(
    league_id: str,
    match_data: MatchCreate,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.MANAGE_MATCHES)),
):
    return MatchService.add_match(
        db,
        league_id,
        home_team=match_data.home_team,
        away_team=match_data.away_team,
        location=match_data.location,
        match_date=match_data.date,
        kickoff=match_data.time,
    )


@router.put("/{match_id}/score", response_model=Match)
async def update_score(
    league_id: str,
    match_id: str,
    score: ScoreUpdate,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.UPDATE_RESULTS)),
):
    """Record a result. Team stats are not touched."""
    return MatchService.update_score(db, league_id, match_id, score.home_score, score.away_score)


@router.delete("/{match_id}")
async def delete_match(
    league_id: str,
    match_id: str,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.MANAGE_MATCHES)),
):
    MatchService.delete_match(db, league_id, match_id)
    return {"message": "Match deleted"}

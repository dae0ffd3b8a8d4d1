from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from leaguedesk.database import get_db
from leaguedesk.routers.auth import require
from leaguedesk.services.access import Operation, SessionContext
from leaguedesk.services.leagues import LeagueService
from leaguedesk.schemas.league import League, LeagueCreate

router = APIRouter(prefix="/leagues", tags=["Leagues"])


@router.get("", response_model=List[League])
async def get_leagues(
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    """List leagues, newest first."""
    return LeagueService.list_leagues(db)


@router.post("", response_model=League, status_code=status.HTTP_201_CREATED)
async def create_league(
    league_data: LeagueCreate,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.CREATE_LEAGUE)),
):
    """Create a new league."""
    return LeagueService.create_league(db, league_data.name)


@router.get("/{league_id}", response_model=League)
async def get_league(
    league_id: str,
    db: Session = Depends(get_db),
    _: SessionContext = Depends(require(Operation.VIEW)),
):
    """Get a specific league."""
    return LeagueService.get_league(db, league_id)

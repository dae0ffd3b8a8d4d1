"""League scoping for team and match access."""

from typing import Optional

from sqlalchemy.orm import Session

from leaguedesk.errors import NotFoundError, ValidationError
from leaguedesk.models.league import League
from leaguedesk.models.match import Match
from leaguedesk.models.team import Team
from leaguedesk.services.persistence import reading


def require_league_id(league_id: Optional[str]) -> str:
    if league_id is None or not str(league_id).strip():
        raise ValidationError("A league identifier is required.")
    return str(league_id).strip()


def get_league_or_404(db: Session, league_id: str) -> League:
    with reading(db, "load the league"):
        league = db.query(League).filter(League.id == league_id).first()
    if not league:
        raise NotFoundError("League not found")
    return league


def get_team_in_league(db: Session, league_id: str, team_id: str) -> Team:
    league_id = require_league_id(league_id)
    with reading(db, "load the team"):
        team = db.query(Team).filter(Team.id == team_id, Team.league_id == league_id).first()
    if not team:
        raise NotFoundError("Team not found in this league")
    return team


def get_match_in_league(db: Session, league_id: str, match_id: str) -> Match:
    league_id = require_league_id(league_id)
    with reading(db, "load the match"):
        match = db.query(Match).filter(Match.id == match_id, Match.league_id == league_id).first()
    if not match:
        raise NotFoundError("Match not found in this league")
    return match

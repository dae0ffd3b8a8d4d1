import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from leaguedesk.errors import ValidationError
from leaguedesk.models.team import Team
from leaguedesk.services.cache import ContentCache, team_names_policy
from leaguedesk.services.partitioning import (
    get_league_or_404,
    get_team_in_league,
    require_league_id,
)
from leaguedesk.services.persistence import commit_or_raise, reading
from leaguedesk.services.standings import StandingsService, compute_derived_stats

logger = logging.getLogger(__name__)

TEAM_NAME_MIN = 2
TEAM_NAME_MAX = 50


def validate_team_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if len(name) < TEAM_NAME_MIN:
        raise ValidationError(f"Team name must be at least {TEAM_NAME_MIN} characters.")
    if len(name) > TEAM_NAME_MAX:
        raise ValidationError(f"Team name must not exceed {TEAM_NAME_MAX} characters.")
    return name


class TeamService:
    @staticmethod
    def add_team(db: Session, name: str, league_id: str) -> Team:
        """Register a team at the bottom of the table.

        The provisional rank is the current team count plus one. Concurrent
        registrations may share a rank until the next recomputation.
        """
        name = validate_team_name(name)
        league_id = require_league_id(league_id)
        get_league_or_404(db, league_id)

        with reading(db, "check the league's teams"):
            duplicate = db.query(Team.id).filter(
                Team.league_id == league_id,
                func.lower(Team.name) == name.lower(),
            ).first()
            current_count = db.query(Team).filter(Team.league_id == league_id).count()
        if duplicate is not None:
            raise ValidationError(f'A team named "{name}" is already registered in this league.')
        team = Team(
            league_id=league_id,
            name=name,
            rank=current_count + 1,
            played=0,
            won=0,
            drawn=0,
            lost=0,
            goals_scored=0,
            goals_conceded=0,
            goal_difference=0,
            points=0,
        )
        db.add(team)
        commit_or_raise(db, "register the team")
        db.refresh(team)

        ContentCache(db, team_names_policy()).invalidate(league_id)
        logger.info("Registered team %s in league %s with provisional rank %s", team.name, league_id, team.rank)
        return team

    @staticmethod
    def get_team(db: Session, league_id: str, team_id: str) -> Team:
        return get_team_in_league(db, league_id, team_id)

    @staticmethod
    def update_team_stats(
        db: Session,
        league_id: str,
        team_id: str,
        played: int,
        won: int,
        drawn: int,
        lost: int,
        goals_scored: int,
        goals_conceded: int,
    ) -> Team:
        """Overwrite a team's counters. Rank is left for the next recomputation."""
        league_id = require_league_id(league_id)
        stats = (played, won, drawn, lost, goals_scored, goals_conceded)
        # Validates before touching the store.
        compute_derived_stats(*stats)

        team = get_team_in_league(db, league_id, team_id)
        StandingsService.apply_stats(team, stats)
        commit_or_raise(db, "update the team stats")
        db.refresh(team)
        return team

    @staticmethod
    def list_team_names(db: Session, league_id: str) -> tuple[List[str], bool]:
        """Team names for the match form, served from cache when fresh."""
        league_id = require_league_id(league_id)
        cache = ContentCache(db, team_names_policy())
        cached = cache.get(league_id)
        if cached is not None:
            return list(cached), True

        get_league_or_404(db, league_id)
        with reading(db, "load the team names"):
            rows = db.query(Team.name).filter(Team.league_id == league_id).order_by(Team.name.asc()).all()
        names = [row[0] for row in rows]
        cache.put(names, league_id)
        return names, False

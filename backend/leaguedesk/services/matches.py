from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timezone
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

from leaguedesk.config import get_settings
from leaguedesk.errors import ValidationError
from leaguedesk.models.match import Match
from leaguedesk.schemas.match import MatchStatus
from leaguedesk.services.partitioning import (
    get_league_or_404,
    get_match_in_league,
    require_league_id,
)
from leaguedesk.services.persistence import commit_or_raise, reading

logger = logging.getLogger(__name__)

KICKOFF_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
TEAM_NAME_MAX = 50
LOCATION_MAX = 100


def _league_zone() -> ZoneInfo:
    name = get_settings().league_timezone
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown league timezone %s, falling back to UTC", name)
        return ZoneInfo("UTC")


def combine_kickoff(match_date: date, kickoff: str) -> datetime:
    """Join a calendar date and an HH:MM string into a naive UTC datetime."""
    found = KICKOFF_PATTERN.match(kickoff or "")
    if not found:
        raise ValidationError("Invalid time format (HH:MM).")
    local = datetime.combine(
        match_date,
        time(int(found.group(1)), int(found.group(2))),
        tzinfo=_league_zone(),
    )
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def _required_text(value: Optional[str], label: str, max_length: int) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required.")
    if len(value) > max_length:
        raise ValidationError(f"{label} is too long.")
    return value


def _check_score(label: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{label} must be a non-negative whole number.")
    return value


class MatchService:
    @staticmethod
    def add_match(
        db: Session,
        league_id: str,
        home_team: str,
        away_team: str,
        location: str,
        match_date: date,
        kickoff: str,
    ) -> Match:
        league_id = require_league_id(league_id)
        home_team = _required_text(home_team, "Home team name", TEAM_NAME_MAX)
        away_team = _required_text(away_team, "Away team name", TEAM_NAME_MAX)
        location = _required_text(location, "Location", LOCATION_MAX)
        if home_team.lower() == away_team.lower():
            raise ValidationError("Home and away teams cannot be the same.")
        if match_date is None:
            raise ValidationError("Match date is required.")
        date_time = combine_kickoff(match_date, kickoff)

        get_league_or_404(db, league_id)
        match = Match(
            league_id=league_id,
            home_team=home_team,
            away_team=away_team,
            location=location,
            date_time=date_time,
        )
        db.add(match)
        commit_or_raise(db, "add the match")
        db.refresh(match)
        logger.info("Scheduled %s vs %s in league %s at %s", home_team, away_team, league_id, date_time)
        return match

    @staticmethod
    def list_matches(
        db: Session,
        league_id: str,
        status: MatchStatus = MatchStatus.ALL,
        now: Optional[datetime] = None,
    ) -> List[Match]:
        league_id = require_league_id(league_id)
        get_league_or_404(db, league_id)

        with reading(db, "load the schedule"):
            query = db.query(Match).filter(Match.league_id == league_id)
            if status == MatchStatus.UPCOMING:
                now = now or datetime.utcnow()
                query = query.filter(Match.date_time >= now)
            elif status == MatchStatus.PLAYED:
                query = query.filter(Match.home_score.isnot(None), Match.away_score.isnot(None))
            return query.order_by(Match.date_time.asc()).all()

    @staticmethod
    def update_score(
        db: Session,
        league_id: str,
        match_id: str,
        home_score: int,
        away_score: int,
    ) -> Match:
        """Record a result on the match only; team stats are edited separately."""
        league_id = require_league_id(league_id)
        _check_score("Home score", home_score)
        _check_score("Away score", away_score)

        match = get_match_in_league(db, league_id, match_id)
        match.home_score = home_score
        match.away_score = away_score
        commit_or_raise(db, "update the match score")
        db.refresh(match)
        logger.info("Recorded %s %s-%s %s (match %s)", match.home_team, home_score, away_score, match.away_team, match.id)
        return match

    @staticmethod
    def delete_match(db: Session, league_id: str, match_id: str) -> None:
        match = get_match_in_league(db, league_id, match_id)
        db.delete(match)
        commit_or_raise(db, "delete the match")
        logger.info("Deleted match %s from league %s", match_id, league_id)

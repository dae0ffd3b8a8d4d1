import logging
from typing import List

from sqlalchemy.orm import Session

from leaguedesk.errors import ValidationError
from leaguedesk.models.league import League
from leaguedesk.services.partitioning import get_league_or_404, require_league_id
from leaguedesk.services.persistence import commit_or_raise, reading

logger = logging.getLogger(__name__)

LEAGUE_NAME_MIN = 3
LEAGUE_NAME_MAX = 100


class LeagueService:
    @staticmethod
    def create_league(db: Session, name: str) -> League:
        name = (name or "").strip()
        if not LEAGUE_NAME_MIN <= len(name) <= LEAGUE_NAME_MAX:
            raise ValidationError(
                f"League name must be between {LEAGUE_NAME_MIN} and {LEAGUE_NAME_MAX} characters."
            )

        league = League(name=name)
        db.add(league)
        commit_or_raise(db, "create the league")
        db.refresh(league)
        logger.info("Created league %s (%s)", league.id, league.name)
        return league

    @staticmethod
    def list_leagues(db: Session) -> List[League]:
        with reading(db, "load the leagues"):
            return db.query(League).order_by(League.created_at.desc(), League.name.asc()).all()

    @staticmethod
    def get_league(db: Session, league_id: str) -> League:
        return get_league_or_404(db, require_league_id(league_id))

"""
Standings engine.

Derives goal difference and points from raw team counters, orders a
league's teams into a table and persists the resulting ranks in a single
all-or-nothing commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leaguedesk.errors import PersistenceError, ValidationError
from leaguedesk.models.team import Team
from leaguedesk.services.partitioning import get_league_or_404, require_league_id
from leaguedesk.services.persistence import reading

logger = logging.getLogger(__name__)

POINTS_PER_WIN = 3
POINTS_PER_DRAW = 1

STAT_FIELDS = ("played", "won", "drawn", "lost", "goals_scored", "goals_conceded")


@dataclass(frozen=True)
class DerivedStats:
    goal_difference: int
    points: int


def goal_difference(goals_scored: int, goals_conceded: int) -> int:
    return goals_scored - goals_conceded


def points_for(won: int, drawn: int) -> int:
    return won * POINTS_PER_WIN + drawn * POINTS_PER_DRAW


def _check_counter(name: str, value: object) -> int:
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be a whole number.")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative.")
    return value


def compute_derived_stats(
    played: int,
    won: int,
    drawn: int,
    lost: int,
    goals_scored: int,
    goals_conceded: int,
) -> DerivedStats:
    """Validate raw counters and return the derived table fields."""
    counters = dict(zip(STAT_FIELDS, (played, won, drawn, lost, goals_scored, goals_conceded)))
    for name, value in counters.items():
        _check_counter(name, value)

    if played < won + drawn + lost:
        raise ValidationError(
            "Played matches must be greater than or equal to the sum of won, drawn, and lost matches."
        )

    return DerivedStats(
        goal_difference=goal_difference(goals_scored, goals_conceded),
        points=points_for(won, drawn),
    )


def ranking_key(team) -> tuple:
    """Sort key: points, goal difference, goals scored (all desc), then name."""
    return (-team.points, -team.goal_difference, -team.goals_scored, team.name)


def sort_standings(teams: Iterable) -> list:
    return sorted(teams, key=ranking_key)


def assign_ranks(teams: Iterable) -> list[tuple[object, int]]:
    """Pair every team with its 1-based table position."""
    return [(team, position) for position, team in enumerate(sort_standings(teams), start=1)]


class StandingsService:
    @staticmethod
    def list_standings(db: Session, league_id: str) -> List[Team]:
        league_id = require_league_id(league_id)
        get_league_or_404(db, league_id)
        with reading(db, "load the league standings"):
            return (
                db.query(Team)
                .filter(Team.league_id == league_id)
                .order_by(Team.rank.asc(), Team.name.asc())
                .all()
            )

    @staticmethod
    def recompute_ranks(db: Session, league_id: str) -> tuple[int, List[Team]]:
        """Re-rank every team in the league.

        Returns the number of teams whose rank moved and the new table. On a
        store failure the session is rolled back so the previous ranks stay
        in place, and a PersistenceError is raised for the caller to retry.
        """
        league_id = require_league_id(league_id)

        try:
            get_league_or_404(db, league_id)
            teams = db.query(Team).filter(Team.league_id == league_id).all()
            ranked = assign_ranks(teams)

            changed = 0
            for team, rank in ranked:
                if team.rank != rank:
                    team.rank = rank
                    changed += 1

            db.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Rank recomputation failed for league {league_id}: {exc}", exc_info=True)
            db.rollback()
            raise PersistenceError(
                "Could not update the league standings. No ranks were changed; please retry."
            ) from exc

        logger.info("Recomputed ranks for league %s (%s teams, %s changed)", league_id, len(ranked), changed)
        return changed, [team for team, _ in ranked]

    @staticmethod
    def apply_stats(team: Team, stats: Sequence[int]) -> Team:
        played, won, drawn, lost, goals_scored, goals_conceded = stats
        derived = compute_derived_stats(played, won, drawn, lost, goals_scored, goals_conceded)
        team.played = played
        team.won = won
        team.drawn = drawn
        team.lost = lost
        team.goals_scored = goals_scored
        team.goals_conceded = goals_conceded
        team.goal_difference = derived.goal_difference
        team.points = derived.points
        return team

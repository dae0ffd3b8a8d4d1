from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from leaguedesk.errors import NotFoundError, PersistenceError, ValidationError
from leaguedesk.models import CacheEntry, Team
from leaguedesk.services.cache import ContentCache, team_names_policy
from leaguedesk.services.teams import TeamService


def test_new_team_starts_at_the_bottom_with_zero_counters(db, league):
    TeamService.add_team(db, "Red", league.id)
    team = TeamService.add_team(db, "Blue", league.id)

    assert team.id
    assert team.rank == 2
    assert (team.played, team.won, team.drawn, team.lost) == (0, 0, 0, 0)
    assert (team.goals_scored, team.goals_conceded) == (0, 0)
    assert (team.goal_difference, team.points) == (0, 0)


def test_provisional_rank_counts_only_the_same_league(db, league, other_league):
    TeamService.add_team(db, "Red", other_league.id)
    TeamService.add_team(db, "Blue", other_league.id)
    team = TeamService.add_team(db, "Green", league.id)
    assert team.rank == 1


@pytest.mark.parametrize("name", ["", "R", " R ", "x" * 51])
def test_rejects_names_outside_length_bounds(db, league, name):
    with pytest.raises(ValidationError, match="Team name"):
        TeamService.add_team(db, name, league.id)
    assert db.query(Team).count() == 0


@pytest.mark.parametrize("name", ["FC", "x" * 50])
def test_accepts_names_at_the_length_bounds(db, league, name):
    assert TeamService.add_team(db, name, league.id).name == name


def test_surrounding_whitespace_is_trimmed(db, league):
    assert TeamService.add_team(db, "  Red Star  ", league.id).name == "Red Star"


def test_rejects_duplicate_name_in_same_league(db, league, other_league):
    TeamService.add_team(db, "Red", league.id)
    with pytest.raises(ValidationError, match="already registered"):
        TeamService.add_team(db, "RED", league.id)
    # Same name is fine elsewhere.
    assert TeamService.add_team(db, "Red", other_league.id).rank == 1


@pytest.mark.parametrize("league_id", [None, ""])
def test_requires_a_league_id(db, league_id):
    with pytest.raises(ValidationError, match="league identifier"):
        TeamService.add_team(db, "Red", league_id)


def test_unknown_league_is_not_found(db):
    with pytest.raises(NotFoundError):
        TeamService.add_team(db, "Red", "no-such-league")


def test_stats_update_derives_fields_and_keeps_rank(db, league):
    red = TeamService.add_team(db, "Red", league.id)
    blue = TeamService.add_team(db, "Blue", league.id)

    updated = TeamService.update_team_stats(
        db, league.id, blue.id,
        played=3, won=2, drawn=1, lost=0, goals_scored=7, goals_conceded=2,
    )

    assert updated.goal_difference == 5
    assert updated.points == 7
    assert updated.rank == 2
    db.refresh(red)
    assert red.points == 0


def test_invalid_stats_are_rejected_before_any_write(db, league):
    team = TeamService.add_team(db, "Red", league.id)
    with pytest.raises(ValidationError):
        TeamService.update_team_stats(
            db, league.id, team.id,
            played=1, won=1, drawn=1, lost=0, goals_scored=0, goals_conceded=0,
        )
    db.refresh(team)
    assert team.played == 0


def test_stats_update_is_scoped_to_the_league(db, league, other_league):
    team = TeamService.add_team(db, "Red", league.id)
    with pytest.raises(NotFoundError):
        TeamService.update_team_stats(
            db, other_league.id, team.id,
            played=1, won=1, drawn=0, lost=0, goals_scored=1, goals_conceded=0,
        )


class TestTeamNames:
    def test_miss_reads_the_store_then_hit_serves_the_cache(self, db, league):
        TeamService.add_team(db, "Red", league.id)
        TeamService.add_team(db, "Blue", league.id)

        names, cached = TeamService.list_team_names(db, league.id)
        assert (names, cached) == (["Blue", "Red"], False)

        names, cached = TeamService.list_team_names(db, league.id)
        assert (names, cached) == (["Blue", "Red"], True)

    def test_registration_invalidates_the_cached_list(self, db, league):
        TeamService.add_team(db, "Red", league.id)
        TeamService.list_team_names(db, league.id)

        TeamService.add_team(db, "Blue", league.id)
        names, cached = TeamService.list_team_names(db, league.id)
        assert (names, cached) == (["Blue", "Red"], False)

    def test_entry_expires_after_a_day(self, db, league):
        TeamService.list_team_names(db, league.id)
        entry = db.query(CacheEntry).one()
        assert entry.expires_at - entry.updated_at == timedelta(hours=24)

        cache = ContentCache(db, team_names_policy())
        assert cache.get(league.id, now=entry.updated_at + timedelta(hours=23)) == []
        assert cache.get(league.id, now=entry.updated_at + timedelta(hours=24)) is None

    def test_lists_are_kept_per_league(self, db, league, other_league):
        TeamService.add_team(db, "Red", league.id)
        TeamService.add_team(db, "Green", other_league.id)
        assert TeamService.list_team_names(db, league.id)[0] == ["Red"]
        assert TeamService.list_team_names(db, other_league.id)[0] == ["Green"]

    def test_unknown_league(self, db):
        with pytest.raises(NotFoundError):
            TeamService.list_team_names(db, "missing")



def _locked(*entities, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_stats_update_reports_a_failed_lookup(db, league, monkeypatch):
    team = TeamService.add_team(db, "Red", league.id)
    monkeypatch.setattr(db, "query", _locked)
    with pytest.raises(PersistenceError, match="load the team"):
        TeamService.update_team_stats(
            db, league.id, team.id,
            played=1, won=1, drawn=0, lost=0, goals_scored=1, goals_conceded=0,
        )


def test_registration_reports_a_failed_lookup(db, league, monkeypatch):
    monkeypatch.setattr(db, "query", _locked)
    with pytest.raises(PersistenceError, match="Please try again"):
        TeamService.add_team(db, "Red", league.id)


def test_get_team_is_scoped_to_the_league(db, league, other_league):
    team = TeamService.add_team(db, "Red", league.id)
    assert TeamService.get_team(db, league.id, team.id).name == "Red"
    with pytest.raises(NotFoundError):
        TeamService.get_team(db, other_league.id, team.id)

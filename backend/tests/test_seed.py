from datetime import datetime

from leaguedesk.models import Match, Team
from scripts.seed_data import DEMO_LEAGUE_NAME, FIXTURES_DATA, TEAMS_DATA, seed_league


def test_seeded_league_is_ranked_and_scheduled(db):
    league = seed_league(db)

    assert league.name == DEMO_LEAGUE_NAME
    table = db.query(Team).filter(Team.league_id == league.id).order_by(Team.rank).all()
    assert [team.name for team in table] == [name for name, *_ in TEAMS_DATA]
    assert [team.rank for team in table] == list(range(1, len(TEAMS_DATA) + 1))
    assert table[0].points == 25
    assert table[0].goal_difference == 20

    matches = db.query(Match).filter(Match.league_id == league.id).all()
    assert len(matches) == len(FIXTURES_DATA)
    played = [m for m in matches if m.is_played]
    assert len(played) == 2
    assert all(m.date_time < datetime.utcnow() for m in played)

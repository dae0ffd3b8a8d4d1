"""
Seed script to populate the database with a demo league, teams and fixtures.
Run with: python -m scripts.seed_data
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime, timedelta

from leaguedesk.database import SessionLocal, init_db
from leaguedesk.models import League, UserProfile, UserRole
from leaguedesk.services.leagues import LeagueService
from leaguedesk.services.matches import MatchService
from leaguedesk.services.standings import StandingsService
from leaguedesk.services.teams import TeamService

DEMO_LEAGUE_NAME = "Sunday Community League"

# name, played, won, drawn, lost, goals scored, goals conceded
TEAMS_DATA = [
    ("Dragons FC", 10, 8, 1, 1, 25, 5),
    ("Warriors United", 10, 7, 2, 1, 20, 8),
    ("Titans AFC", 10, 6, 1, 3, 15, 10),
    ("Eagles SC", 10, 5, 3, 2, 18, 12),
    ("Phoenix Rising", 10, 4, 2, 4, 12, 15),
    ("Cobras FC", 10, 3, 2, 5, 10, 18),
    ("Sharks Athletic", 10, 2, 1, 7, 8, 22),
    ("Lions Pride", 10, 0, 2, 8, 5, 23),
]

# home, away, location, days from today, kick-off, result
FIXTURES_DATA = [
    ("Dragons FC", "Lions Pride", "Central Stadium", -7, "14:00", (3, 0)),
    ("Warriors United", "Sharks Athletic", "North Park", -7, "16:00", (2, 1)),
    ("Dragons FC", "Warriors United", "Central Stadium", 7, "14:00", None),
    ("Titans AFC", "Eagles SC", "North Park", 7, "16:00", None),
    ("Phoenix Rising", "Cobras FC", "East Arena", 8, "11:00", None),
    ("Sharks Athletic", "Lions Pride", "West Field", 8, "13:30", None),
    ("Dragons FC", "Titans AFC", "Central Stadium", 14, "14:00", None),
    ("Warriors United", "Eagles SC", "North Park", 14, "16:00", None),
]


def create_tables():
    """Create all database tables and apply pending schema updates."""
    init_db()
    print("Database tables created.")


def seed_league(db) -> League:
    """Create the demo league with its table and fixtures, then rank it."""
    league = LeagueService.create_league(db, DEMO_LEAGUE_NAME)

    for name, *stats in TEAMS_DATA:
        team = TeamService.add_team(db, name, league.id)
        played, won, drawn, lost, goals_scored, goals_conceded = stats
        TeamService.update_team_stats(
            db,
            league.id,
            team.id,
            played=played,
            won=won,
            drawn=drawn,
            lost=lost,
            goals_scored=goals_scored,
            goals_conceded=goals_conceded,
        )
    print(f"Created {len(TEAMS_DATA)} teams.")

    today = datetime.utcnow().date()
    for home, away, location, offset, kickoff, result in FIXTURES_DATA:
        match = MatchService.add_match(
            db,
            league.id,
            home_team=home,
            away_team=away,
            location=location,
            match_date=today + timedelta(days=offset),
            kickoff=kickoff,
        )
        if result is not None:
            MatchService.update_score(db, league.id, match.id, *result)
    print(f"Created {len(FIXTURES_DATA)} matches.")

    changed, _ = StandingsService.recompute_ranks(db, league.id)
    print(f"Ranked league table ({changed} ranks changed).")
    return league


def seed_demo_creator(db) -> UserProfile:
    profile = UserProfile(
        uid="demo-creator",
        email="creator@example.com",
        display_name="Demo Creator",
        role=UserRole.CREATOR.value,
    )
    db.add(profile)
    db.commit()
    print("Created demo Creator profile (uid: demo-creator).")
    return profile


def main():
    """Run all seed functions."""
    print("Starting database seed...")
    print("=" * 50)

    create_tables()

    db = SessionLocal()

    try:
        existing = db.query(League).filter(League.name == DEMO_LEAGUE_NAME).first()
        if existing:
            print(f"Demo league already exists ({existing.id}). Skipping seed.")
            print("To reseed, delete the database file and run again.")
            return

        league = seed_league(db)
        if not db.query(UserProfile).filter(UserProfile.uid == "demo-creator").first():
            seed_demo_creator(db)

        print("=" * 50)
        print(f"Seeded {league.name} (id: {league.id}).")
        print(f"Standings: GET /leagues/{league.id}/teams")

    finally:
        db.close()


if __name__ == "__main__":
    main()

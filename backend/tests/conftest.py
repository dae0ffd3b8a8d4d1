import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["IDENTITY_TOKEN_SECRET"] = "test-identity-secret"
os.environ["CREATOR_EMAILS"] = "owner@example.com"
os.environ["GENAI_API_KEY"] = "test-genai-key"
os.environ["LEAGUE_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import leaguedesk.models  # noqa: F401
from leaguedesk.database import Base, get_db
from leaguedesk.main import app
from leaguedesk.models import League, Team, UserProfile, UserRole
from leaguedesk.services.auth import AuthService
from leaguedesk.services.teams import TeamService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def league(db) -> League:
    league = League(name="Sunday League")
    db.add(league)
    db.commit()
    db.refresh(league)
    return league


@pytest.fixture
def other_league(db) -> League:
    league = League(name="Saturday League")
    db.add(league)
    db.commit()
    db.refresh(league)
    return league


@pytest.fixture
def make_team(db):
    def _make_team(league_id: str, name: str, won: int = 0, drawn: int = 0, lost: int = 0,
                   goals_scored: int = 0, goals_conceded: int = 0) -> Team:
        team = TeamService.add_team(db, name, league_id)
        if won or drawn or lost or goals_scored or goals_conceded:
            team = TeamService.update_team_stats(
                db,
                league_id,
                team.id,
                played=won + drawn + lost,
                won=won,
                drawn=drawn,
                lost=lost,
                goals_scored=goals_scored,
                goals_conceded=goals_conceded,
            )
        return team

    return _make_team


@pytest.fixture
def profiles(db) -> dict[UserRole, UserProfile]:
    created = {}
    for role in UserRole:
        profile = UserProfile(
            uid=f"uid-{role.value.lower()}",
            email=f"{role.value.lower()}@example.com",
            display_name=f"{role.value} User",
            role=role.value,
        )
        db.add(profile)
        created[role] = profile
    db.commit()
    return created


@pytest.fixture
def headers(profiles) -> dict[UserRole, dict[str, str]]:
    return {
        role: {"Authorization": f"Bearer {AuthService.create_access_token({'sub': profile.uid})}"}
        for role, profile in profiles.items()
    }


@pytest.fixture
def identity_token():
    return make_identity_token


def make_identity_token(uid: str, email: str | None = None, name: str | None = None,
                        secret: str = "test-identity-secret") -> str:
    claims = {"sub": uid}
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    return jwt.encode(claims, secret, algorithm="HS256")

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from leaguedesk.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()
database_url = settings.database_url.replace("postgres://", "postgresql://", 1)
is_sqlite = database_url.startswith("sqlite")

engine = create_engine(
    database_url,
    connect_args={"check_same_thread": False} if is_sqlite else {},
    pool_pre_ping=True,
    pool_recycle=1800,
)

if is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # Teams and matches must point at an existing league.
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    """Create missing tables, then bring older databases up to date."""
    from leaguedesk import models  # noqa: F401
    from leaguedesk.migrations import ensure_schema_updates

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created/verified")
    ensure_schema_updates(bind)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

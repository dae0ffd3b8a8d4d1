"""Lightweight migrations for databases created by earlier releases."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

LEGACY_LEAGUE_NAME = "Unassigned League"


def ensure_schema_updates(engine: Engine) -> None:
    _ensure_league_columns(engine)
    _ensure_user_session_columns(engine)
    _ensure_cache_columns(engine)
    _ensure_indexes(engine)
    _backfill_league_scope(engine)


def _add_missing_columns(engine: Engine, table: str, columns: list[tuple[str, str]]) -> None:
    inspector = inspect(engine)
    if table not in inspector.get_table_names():
        return

    existing = {col["name"] for col in inspector.get_columns(table)}
    with engine.begin() as connection:
        for name, sql_type in columns:
            if name in existing:
                continue
            logger.info("Adding missing column %s.%s", table, name)
            connection.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {sql_type}"))


def _ensure_league_columns(engine: Engine) -> None:
    """Teams and matches predating league partitioning have no league_id."""
    _add_missing_columns(engine, "teams", [("league_id", "VARCHAR(36)")])
    _add_missing_columns(engine, "matches", [("league_id", "VARCHAR(36)")])


def _ensure_user_session_columns(engine: Engine) -> None:
    _add_missing_columns(engine, "users", [
        ("refresh_token_hash", "TEXT"),
        ("refresh_token_expires_at", "TIMESTAMP"),
        ("refresh_token_last_used_at", "TIMESTAMP"),
    ])


def _ensure_cache_columns(engine: Engine) -> None:
    _add_missing_columns(engine, "cache_entries", [("expires_at", "TIMESTAMP")])


def _ensure_indexes(engine: Engine) -> None:
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    with engine.begin() as connection:
        if "teams" in tables:
            connection.execute(text(
                "CREATE INDEX IF NOT EXISTS idx_teams_league_rank "
                "ON teams (league_id, rank)"
            ))
        if "matches" in tables:
            connection.execute(text(
                "CREATE INDEX IF NOT EXISTS idx_matches_league_date_time "
                "ON matches (league_id, date_time)"
            ))


def _backfill_league_scope(engine: Engine) -> None:
    """Move unscoped teams and matches into a placeholder league."""
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    if "leagues" not in tables:
        return

    scoped_tables = [name for name in ("teams", "matches") if name in tables]
    with engine.begin() as connection:
        orphan_counts = {
            name: connection.execute(
                text(f"SELECT COUNT(*) FROM {name} WHERE league_id IS NULL OR league_id = ''")
            ).scalar() or 0
            for name in scoped_tables
        }
        if not any(orphan_counts.values()):
            return

        league_id = connection.execute(
            text("SELECT id FROM leagues WHERE name = :name"),
            {"name": LEGACY_LEAGUE_NAME},
        ).scalar()
        if league_id is None:
            league_id = str(uuid.uuid4())
            connection.execute(
                text("INSERT INTO leagues (id, name, created_at) VALUES (:id, :name, :created_at)"),
                {"id": league_id, "name": LEGACY_LEAGUE_NAME, "created_at": datetime.utcnow()},
            )
            logger.info("Created league %s for unscoped records", league_id)

        for name, count in orphan_counts.items():
            if not count:
                continue
            connection.execute(
                text(f"UPDATE {name} SET league_id = :league_id WHERE league_id IS NULL OR league_id = ''"),
                {"league_id": league_id},
            )
            logger.info("Assigned %s unscoped %s rows to league %s", count, name, league_id)

"""Content-addressed cache stored in the ``cache_entries`` table.

Keys are derived from a namespace plus the values that identify the cached
content, so a change in any of those values yields a fresh key and the old
entry is simply never read again. Each namespace carries its own TTL policy.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leaguedesk.config import get_settings
from leaguedesk.models.cache_entry import CacheEntry

logger = logging.getLogger(__name__)

TEAM_NAMES_NAMESPACE = "team_names"
TEAM_SUMMARY_NAMESPACE = "team_summary"


@dataclass(frozen=True)
class CachePolicy:
    namespace: str
    ttl: Optional[timedelta] = None  # None keeps entries until invalidated


def team_names_policy() -> CachePolicy:
    hours = get_settings().team_list_cache_ttl_hours
    return CachePolicy(TEAM_NAMES_NAMESPACE, timedelta(hours=hours))


def team_summary_policy() -> CachePolicy:
    return CachePolicy(TEAM_SUMMARY_NAMESPACE, None)


def derive_cache_key(namespace: str, *parts: Any) -> str:
    raw = json.dumps([namespace, *parts], separators=(",", ":"), default=str)
    digest = hashlib.sha256(raw.encode("utf-8")).hexdigest()
    return f"{namespace}:{digest}"


class ContentCache:
    def __init__(self, db: Session, policy: CachePolicy):
        self.db = db
        self.policy = policy

    def key_for(self, *parts: Any) -> str:
        return derive_cache_key(self.policy.namespace, *parts)

    def get(self, *parts: Any, now: Optional[datetime] = None) -> Optional[Any]:
        key = self.key_for(*parts)
        try:
            row = self.db.query(CacheEntry).filter(CacheEntry.key == key).first()
        except SQLAlchemyError as exc:
            # An unreadable cache is a miss.
            logger.warning(f"Failed to read cache entry {key}: {exc}")
            self.db.rollback()
            return None
        if not row:
            return None

        now = now or datetime.utcnow()
        if row.expires_at is not None and row.expires_at <= now:
            logger.debug("Cache entry %s expired at %s", key, row.expires_at)
            return None

        try:
            return json.loads(row.value_json)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable cache entry %s", key)
            return None

    def put(self, value: Any, *parts: Any, now: Optional[datetime] = None) -> str:
        key = self.key_for(*parts)
        now = now or datetime.utcnow()
        expires_at = now + self.policy.ttl if self.policy.ttl is not None else None
        encoded = json.dumps(value, separators=(",", ":"))

        try:
            row = self.db.query(CacheEntry).filter(CacheEntry.key == key).first()
            if row:
                row.value_json = encoded
                row.expires_at = expires_at
                row.updated_at = now
            else:
                row = CacheEntry(
                    key=key,
                    namespace=self.policy.namespace,
                    value_json=encoded,
                    expires_at=expires_at,
                    updated_at=now,
                )
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            # Cache writes never fail the caller.
            logger.warning(f"Failed to save cache entry {key}: {exc}")
            self.db.rollback()
        return key

    def invalidate(self, *parts: Any) -> None:
        key = self.key_for(*parts)
        try:
            self.db.query(CacheEntry).filter(CacheEntry.key == key).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            logger.warning(f"Failed to invalidate cache entry {key}: {exc}")
            self.db.rollback()

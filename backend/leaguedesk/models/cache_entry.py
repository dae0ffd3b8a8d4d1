from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from leaguedesk.database import Base


class CacheEntry(Base):
    __tablename__ = "cache_entries"

    key = Column(String(128), primary_key=True)
    namespace = Column(String(50), nullable=False, index=True)
    value_json = Column(Text, nullable=False)
    expires_at = Column(DateTime, nullable=True)  # NULL never expires
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from leaguedesk.database import Base


class Match(Base):
    __tablename__ = "matches"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    league_id = Column(String(36), ForeignKey("leagues.id"), nullable=False, index=True)
    # Team names are copied, not referenced by id.
    home_team = Column(String(50), nullable=False)
    away_team = Column(String(50), nullable=False)
    location = Column(String(100), nullable=False)
    date_time = Column(DateTime, nullable=False, index=True)  # UTC
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    league = relationship("League", back_populates="matches")

    @property
    def is_played(self) -> bool:
        return self.home_score is not None and self.away_score is not None

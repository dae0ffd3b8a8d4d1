from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from leaguedesk.database import Base


class League(Base):
    __tablename__ = "leagues"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    teams = relationship("Team", back_populates="league")
    matches = relationship("Match", back_populates="league")

from datetime import datetime
import enum

from sqlalchemy import Column, DateTime, String, Text

from leaguedesk.database import Base


class UserRole(str, enum.Enum):
    CREATOR = "Creator"
    ADMINISTRATOR = "Administrator"
    MEMBER = "Member"
    VIEWER = "Viewer"


class UserProfile(Base):
    __tablename__ = "users"

    # Subject id issued by the identity provider.
    uid = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=True, index=True)
    display_name = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.VIEWER.value)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    refresh_token_hash = Column(Text, nullable=True)
    refresh_token_expires_at = Column(DateTime, nullable=True)
    refresh_token_last_used_at = Column(DateTime, nullable=True)

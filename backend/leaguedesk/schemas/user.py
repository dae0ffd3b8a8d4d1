from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from leaguedesk.models.user import UserRole


class UserProfile(BaseModel):
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RoleUpdate(BaseModel):
    role: UserRole


class SessionRequest(BaseModel):
    id_token: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: str
    expires_in: int
    user: UserProfile


class TokenRefreshRequest(BaseModel):
    refresh_token: str


class TokenData(BaseModel):
    uid: Optional[str] = None

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from leaguedesk.database import get_db
from leaguedesk.routers.auth import get_session_context
from leaguedesk.services.access import SessionContext
from leaguedesk.services.users import UserAdminService
from leaguedesk.schemas.user import RoleUpdate, UserProfile

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserProfile])
async def get_users(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return UserAdminService.list_users(db, ctx)


@router.put("/{uid}/role", response_model=UserProfile)
async def update_user_role(
    uid: str,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return UserAdminService.update_role(db, ctx, uid, payload.role)

import logging
from typing import List

from sqlalchemy.orm import Session

from leaguedesk.errors import NotFoundError, PermissionDeniedError
from leaguedesk.models.user import UserProfile, UserRole
from leaguedesk.services.access import Operation, SessionContext
from leaguedesk.services.persistence import commit_or_raise, reading

logger = logging.getLogger(__name__)


class UserAdminService:
    @staticmethod
    def list_users(db: Session, ctx: SessionContext) -> List[UserProfile]:
        ctx.require(Operation.MANAGE_USERS)
        with reading(db, "load the users"):
            return db.query(UserProfile).order_by(UserProfile.created_at.asc(), UserProfile.uid.asc()).all()

    @staticmethod
    def update_role(db: Session, ctx: SessionContext, uid: str, role: UserRole) -> UserProfile:
        ctx.require(Operation.MANAGE_USERS)
        role = UserRole(role)

        with reading(db, "load the user"):
            target = db.query(UserProfile).filter(UserProfile.uid == uid).first()
        if not target:
            raise NotFoundError("User not found")

        if target.uid == ctx.uid and target.role == UserRole.CREATOR.value and role != UserRole.CREATOR:
            raise PermissionDeniedError("Creators cannot demote themselves.")

        if target.role != role.value:
            previous = target.role
            target.role = role.value
            db.add(target)
            commit_or_raise(db, "update the user role")
            db.refresh(target)
            logger.info("User %s changed role of %s from %s to %s", ctx.uid, target.uid, previous, role.value)
        return target

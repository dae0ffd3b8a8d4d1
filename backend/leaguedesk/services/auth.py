from datetime import datetime, timedelta
from typing import Optional
from dataclasses import dataclass
import hashlib
import logging
import secrets
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from leaguedesk.config import get_settings
from leaguedesk.models.user import UserProfile, UserRole
from leaguedesk.schemas.user import TokenData
from leaguedesk.services.persistence import commit_or_raise, reading

logger = logging.getLogger(__name__)


@dataclass
class IdentityClaims:
    """What the identity provider tells us about a signed-in user."""

    uid: str
    email: Optional[str]
    display_name: Optional[str]


class AuthService:
    @staticmethod
    def _hash_refresh_token(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    @staticmethod
    def verify_identity_token(token: str) -> Optional[IdentityClaims]:
        settings = get_settings()
        options = {"verify_aud": settings.identity_token_audience is not None}
        try:
            payload = jwt.decode(
                token,
                settings.identity_token_secret,
                algorithms=[settings.identity_token_algorithm],
                audience=settings.identity_token_audience,
                options=options,
            )
        except JWTError as exc:
            logger.info("Rejected identity token: %s", exc)
            return None

        uid = payload.get("sub") or payload.get("uid")
        if not uid:
            return None
        return IdentityClaims(
            uid=str(uid),
            email=payload.get("email"),
            display_name=payload.get("name") or payload.get("display_name"),
        )

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        settings = get_settings()
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
        return encoded_jwt

    @staticmethod
    def decode_token(token: str) -> Optional[TokenData]:
        settings = get_settings()
        try:
            payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
            uid: str = payload.get("sub")
            if uid is None:
                return None
            return TokenData(uid=uid)
        except JWTError:
            return None

    @staticmethod
    def ensure_profile(db: Session, claims: IdentityClaims) -> UserProfile:
        """Fetch the profile for a sign-in, creating a Viewer profile if absent."""
        with reading(db, "load the user profile"):
            profile = db.query(UserProfile).filter(UserProfile.uid == claims.uid).first()
        if profile is None:
            settings = get_settings()
            role = UserRole.VIEWER
            if claims.email and claims.email.lower() in settings.creator_email_set:
                role = UserRole.CREATOR
            profile = UserProfile(
                uid=claims.uid,
                email=claims.email,
                display_name=claims.display_name or claims.email,
                role=role.value,
            )
            db.add(profile)
            commit_or_raise(db, "create the user profile")
            db.refresh(profile)
            logger.info("Created profile %s with role %s", profile.uid, profile.role)
            return profile

        changed = False
        if claims.email and claims.email != profile.email:
            profile.email = claims.email
            changed = True
        if claims.display_name and claims.display_name != profile.display_name:
            profile.display_name = claims.display_name
            changed = True
        if changed:
            db.add(profile)
            commit_or_raise(db, "update the user profile")
            db.refresh(profile)
        return profile

    @staticmethod
    def _store_refresh_token(db: Session, user: UserProfile, refresh_token: Optional[str], action: str) -> None:
        now = datetime.utcnow()
        if refresh_token:
            user.refresh_token_hash = AuthService._hash_refresh_token(refresh_token)
            user.refresh_token_expires_at = now + timedelta(days=get_settings().refresh_token_expire_days)
            user.refresh_token_last_used_at = now
        else:
            user.refresh_token_hash = None
            user.refresh_token_expires_at = None
            user.refresh_token_last_used_at = None
        db.add(user)
        commit_or_raise(db, action)

    @staticmethod
    def issue_refresh_token(db: Session, user: UserProfile) -> str:
        """Start or rotate a session. Only the hash of the token is stored."""
        refresh_token = secrets.token_urlsafe(48)
        AuthService._store_refresh_token(db, user, refresh_token, "start the session")
        return refresh_token

    @staticmethod
    def clear_refresh_token(db: Session, user: UserProfile) -> None:
        AuthService._store_refresh_token(db, user, None, "end the session")

    @staticmethod
    def get_user_by_uid(db: Session, uid: str) -> Optional[UserProfile]:
        with reading(db, "load the user profile"):
            return db.query(UserProfile).filter(UserProfile.uid == uid).first()

    @staticmethod
    def get_user_by_refresh_token(db: Session, refresh_token: str) -> Optional[UserProfile]:
        if not refresh_token:
            return None
        token_hash = AuthService._hash_refresh_token(refresh_token)
        with reading(db, "check the session"):
            return db.query(UserProfile).filter(UserProfile.refresh_token_hash == token_hash).first()

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from datetime import datetime, timedelta

from leaguedesk.database import get_db
from leaguedesk.config import get_settings
from leaguedesk.services.access import Operation, SessionContext
from leaguedesk.services.auth import AuthService
from leaguedesk.schemas.user import UserProfile, SessionRequest, Token, TokenRefreshRequest
from leaguedesk.models.user import UserProfile as UserProfileModel

router = APIRouter(prefix="/auth", tags=["Authentication"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/session", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> UserProfileModel:
    if not token:
        raise _unauthorized("Not authenticated")
    token_data = AuthService.decode_token(token)
    if not token_data:
        raise _unauthorized("Invalid token")
    user = AuthService.get_user_by_uid(db, token_data.uid)
    if not user:
        raise _unauthorized("User not found")
    return user


async def get_session_context(
    current_user: UserProfileModel = Depends(get_current_user),
) -> SessionContext:
    return SessionContext(user=current_user)


def require(operation: Operation):
    """Dependency that resolves the session and checks the role policy."""

    async def _dependency(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
        return ctx.require(operation)

    return _dependency


def _issue_tokens(user: UserProfileModel, refresh_token: str) -> Token:
    settings = get_settings()
    access_token_expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = AuthService.create_access_token(
        data={"sub": user.uid}, expires_delta=access_token_expires
    )
    return Token(
        access_token=access_token,
        token_type="bearer",
        refresh_token=refresh_token,
        expires_in=int(access_token_expires.total_seconds()),
        user=UserProfile.model_validate(user),
    )


@router.post("/session", response_model=Token)
async def create_session(payload: SessionRequest, db: Session = Depends(get_db)):
    """Exchange an identity provider token for an API session."""
    claims = AuthService.verify_identity_token(payload.id_token)
    if not claims:
        raise _unauthorized("Invalid identity token")
    user = AuthService.ensure_profile(db, claims)
    refresh_token = AuthService.issue_refresh_token(db, user)
    return _issue_tokens(user, refresh_token)


@router.post("/refresh", response_model=Token)
async def refresh_session(
    payload: TokenRefreshRequest,
    db: Session = Depends(get_db)
):
    """Refresh access token using a refresh token."""
    user = AuthService.get_user_by_refresh_token(db, payload.refresh_token)
    if not user or not user.refresh_token_expires_at:
        raise _unauthorized("Invalid refresh token")
    if user.refresh_token_expires_at < datetime.utcnow():
        AuthService.clear_refresh_token(db, user)
        raise _unauthorized("Refresh token expired")

    refresh_token = AuthService.issue_refresh_token(db, user)
    return _issue_tokens(user, refresh_token)


@router.post("/logout")
async def logout(
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """End the session by revoking the refresh token."""
    AuthService.clear_refresh_token(db, ctx.user)
    return {"message": "Signed out"}


@router.get("/me", response_model=UserProfile)
async def get_me(ctx: SessionContext = Depends(get_session_context)):
    """Get current user profile."""
    return ctx.user

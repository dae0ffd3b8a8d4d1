from leaguedesk.routers.auth import router as auth_router
from leaguedesk.routers.leagues import router as leagues_router
from leaguedesk.routers.teams import router as teams_router
from leaguedesk.routers.matches import router as matches_router
from leaguedesk.routers.users import router as users_router

__all__ = [
    "auth_router",
    "leagues_router",
    "teams_router",
    "matches_router",
    "users_router",
]

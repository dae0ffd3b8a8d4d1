from leaguedesk.schemas.user import (
    UserProfile, RoleUpdate, SessionRequest, Token, TokenRefreshRequest, TokenData
)
from leaguedesk.schemas.league import League, LeagueCreate
from leaguedesk.schemas.team import Team, TeamCreate, TeamStatsUpdate, TeamNameList, RecomputeResult
from leaguedesk.schemas.match import Match, MatchCreate, MatchStatus, ScoreUpdate
from leaguedesk.schemas.summary import (
    TeamPerformanceInput, TeamPerformanceSummary, TeamPerformanceResponse
)

__all__ = [
    "UserProfile", "RoleUpdate", "SessionRequest", "Token", "TokenRefreshRequest", "TokenData",
    "League", "LeagueCreate",
    "Team", "TeamCreate", "TeamStatsUpdate", "TeamNameList", "RecomputeResult",
    "Match", "MatchCreate", "MatchStatus", "ScoreUpdate",
    "TeamPerformanceInput", "TeamPerformanceSummary", "TeamPerformanceResponse",
]

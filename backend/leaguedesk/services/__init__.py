from leaguedesk.services.auth import AuthService
from leaguedesk.services.leagues import LeagueService
from leaguedesk.services.teams import TeamService
from leaguedesk.services.matches import MatchService
from leaguedesk.services.standings import StandingsService
from leaguedesk.services.summary import PerformanceSummaryService
from leaguedesk.services.users import UserAdminService

__all__ = [
    "AuthService",
    "LeagueService",
    "TeamService",
    "MatchService",
    "StandingsService",
    "PerformanceSummaryService",
    "UserAdminService",
]

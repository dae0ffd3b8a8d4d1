from leaguedesk.models.user import UserProfile, UserRole
from leaguedesk.models.league import League
from leaguedesk.models.team import Team
from leaguedesk.models.match import Match
from leaguedesk.models.cache_entry import CacheEntry

__all__ = [
    "UserProfile",
    "UserRole",
    "League",
    "Team",
    "Match",
    "CacheEntry",
]

"""Role policy for league operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from leaguedesk.errors import PermissionDeniedError
from leaguedesk.models.user import UserProfile, UserRole


class Operation(str, Enum):
    VIEW = "view"
    CREATE_LEAGUE = "create_league"
    REGISTER_TEAM = "register_team"
    MANAGE_MATCHES = "manage_matches"
    UPDATE_RESULTS = "update_results"
    MANAGE_USERS = "manage_users"


ALLOWED_ROLES: dict[Operation, frozenset[UserRole]] = {
    Operation.VIEW: frozenset(UserRole),
    Operation.CREATE_LEAGUE: frozenset({UserRole.CREATOR}),
    Operation.REGISTER_TEAM: frozenset({UserRole.ADMINISTRATOR, UserRole.CREATOR}),
    Operation.MANAGE_MATCHES: frozenset({UserRole.ADMINISTRATOR, UserRole.CREATOR}),
    Operation.UPDATE_RESULTS: frozenset({UserRole.MEMBER, UserRole.ADMINISTRATOR, UserRole.CREATOR}),
    Operation.MANAGE_USERS: frozenset({UserRole.CREATOR}),
}


@dataclass(frozen=True)
class SessionContext:
    """The signed-in user for the current request."""

    user: UserProfile

    @property
    def uid(self) -> str:
        return self.user.uid

    @property
    def role(self) -> UserRole:
        try:
            return UserRole(self.user.role)
        except ValueError:
            raise PermissionDeniedError(
                f"Your profile has an unrecognised role ({self.user.role}). Ask a Creator to reassign it."
            ) from None

    def can(self, operation: Operation) -> bool:
        return self.role in ALLOWED_ROLES[operation]

    def require(self, operation: Operation) -> "SessionContext":
        if not self.can(operation):
            raise PermissionDeniedError(
                f"Your role ({self.role.value}) is not allowed to {operation.value.replace('_', ' ')}."
            )
        return self

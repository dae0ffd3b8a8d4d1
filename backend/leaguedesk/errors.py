"""Domain errors raised by the service layer.

Routers never catch these; ``leaguedesk.main`` maps each class to an HTTP
status with a ``{"detail": message}`` body.
"""


class LeagueDeskError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LeagueDeskError):
    """Bad input shape or range. Raised before any I/O."""

    status_code = 400


class PermissionDeniedError(LeagueDeskError):
    status_code = 403


class NotFoundError(LeagueDeskError):
    status_code = 404


class ExternalServiceError(LeagueDeskError):
    """The AI summary provider failed or returned something unusable."""

    status_code = 502


class PersistenceError(LeagueDeskError):
    """The backing store rejected a read or write."""

    status_code = 503
